"""Observability module for structured logging and statement correlation."""

from docstore.observability.context import bind_statement, get_statement_context
from docstore.observability.logging import JsonFormatter, configure_logging


__all__ = [
    "JsonFormatter",
    "bind_statement",
    "configure_logging",
    "get_statement_context",
]
