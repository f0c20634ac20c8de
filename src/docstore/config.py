"""Centralized configuration for docstore using Pydantic Settings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class Settings(BaseSettings):
    """Typed configuration loaded from ``DOCSTORE_*`` environment variables.

    Values may also come from a ``.env`` file in the working directory.
    Command-line flags of the REPL override whatever is loaded here.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="warning", description="Logging level")
    log_json: bool = Field(default=False, description="Emit structured JSON logs instead of plain text")

    # REPL
    prompt: str = Field(default="> ", description="Prompt printed before each statement")
    continuation_prompt: str = Field(default="... ", description="Prompt printed while a statement is incomplete")
    banner: str = Field(default="Enter commands:", description="Line printed when an interactive session starts")
    exit_command: str = Field(default="exit", min_length=1, description="Input that ends the session")

    # Limits
    max_document_chars: int = Field(
        default=1_000_000,
        ge=1,
        description="Maximum number of characters accepted for one inserted document",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return normalized

    def is_exit_command(self, line: str) -> bool:
        """Check whether ``line`` asks to leave the session (with or without ``;``)."""
        stripped = line.strip().rstrip(";").strip()
        return stripped.lower() == self.exit_command.lower()
