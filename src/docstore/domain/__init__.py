"""Domain layer - pure value objects and errors with no store dependencies.

- Entities: Document (immutable, identified by its sequential id)
- Value Objects: search hits, responses and index snapshots
- Errors: everything a store operation can report back to its caller
"""

from docstore.domain.model import (
    CollectionAlreadyExistsError,
    CollectionNotFoundError,
    DocStoreError,
    Document,
    InvalidDocumentError,
    InvalidIdentifierError,
    InvalidQueryError,
    is_valid_identifier,
    validate_identifier,
)
from docstore.domain.search import IndexDump, IndexEntry, PostingEntry, SearchHit, SearchResponse


__all__ = [
    "CollectionAlreadyExistsError",
    "CollectionNotFoundError",
    "DocStoreError",
    "Document",
    "IndexDump",
    "IndexEntry",
    "InvalidDocumentError",
    "InvalidIdentifierError",
    "InvalidQueryError",
    "PostingEntry",
    "SearchHit",
    "SearchResponse",
    "is_valid_identifier",
    "validate_identifier",
]
