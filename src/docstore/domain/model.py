"""Domain model - documents, identifiers and the errors raised around them.

The domain layer has no dependencies on the store or the command surface.
Documents are immutable value objects validated by Pydantic at construction.
"""

import re

from pydantic import Field
from pydantic.dataclasses import dataclass


_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_]*", re.ASCII)


class DocStoreError(Exception):
    """Base class for errors reported back to the caller of a store operation."""


class InvalidIdentifierError(DocStoreError):
    """Raised when a collection name is not a valid identifier."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid collection name: {name!r}")
        self.name = name


class CollectionAlreadyExistsError(DocStoreError):
    """Raised when creating a collection whose name is taken."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Collection {name} already exists")
        self.name = name


class CollectionNotFoundError(DocStoreError):
    """Raised when an operation references a collection that was never created."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Collection {name} does not exist")
        self.name = name


class InvalidQueryError(DocStoreError):
    """Raised when query arguments are out of range."""


class InvalidDocumentError(DocStoreError):
    """Raised when document text is rejected before insertion."""


def is_valid_identifier(name: str) -> bool:
    """Non-empty, starts with an ASCII letter, then letters, digits or underscore."""
    return bool(name) and _IDENTIFIER_PATTERN.fullmatch(name) is not None


def validate_identifier(name: str) -> str:
    """Return ``name`` unchanged or raise :class:`InvalidIdentifierError`."""
    if not is_valid_identifier(name):
        raise InvalidIdentifierError(name)
    return name


@dataclass(frozen=True)
class Document:
    """A single inserted text.

    ``doc_id`` is assigned by the owning collection and never reused. ``text``
    is kept exactly as submitted; normalization only happens in the index.
    """

    doc_id: int = Field(ge=1)
    text: str = ""
