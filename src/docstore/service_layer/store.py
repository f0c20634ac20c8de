"""In-memory collection store.

The store owns every collection for the lifetime of the process. Each
collection is an append-only sequence of documents plus its inverted index;
inserting a document is the only place the index is mutated.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import logging

from docstore.domain.model import (
    CollectionAlreadyExistsError,
    CollectionNotFoundError,
    Document,
    InvalidDocumentError,
    validate_identifier,
)
from docstore.search.analyzers import tokenize
from docstore.search.inverted_index import IndexReader, InvertedIndex


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Collection:
    """Documents of one collection and the index derived from them."""

    name: str
    documents: list[Document] = field(default_factory=list)
    index: InvertedIndex = field(default_factory=InvertedIndex)

    @property
    def document_count(self) -> int:
        return len(self.documents)

    def append(self, text: str) -> Document:
        """Assign the next id, index ``text`` and store the document."""
        tokens = tokenize(text)
        document = Document(doc_id=self.document_count + 1, text=text)
        self.index.add_document(document.doc_id, tokens)
        self.documents.append(document)
        return document

    def view(self) -> CollectionView:
        return CollectionView(name=self.name, documents=DocumentSequence(self.documents), index=self.index.reader())


class DocumentSequence(Sequence[Document]):
    """Read-only, live sequence over a collection's documents."""

    __slots__ = ("_documents",)

    def __init__(self, documents: list[Document]) -> None:
        self._documents = documents

    def __len__(self) -> int:
        return len(self._documents)

    def __getitem__(self, item):
        if isinstance(item, slice):
            return tuple(self._documents[item])
        return self._documents[item]

    def __repr__(self) -> str:
        return f"DocumentSequence(count={len(self._documents)})"


@dataclass(frozen=True, slots=True)
class CollectionView:
    """Read-only handle handed to query code.

    Both ``documents`` and ``index`` track later inserts into the collection.
    """

    name: str
    documents: Sequence[Document]
    index: IndexReader

    def get_document(self, doc_id: int) -> Document | None:
        # ids are dense and 1-based
        if 1 <= doc_id <= len(self.documents):
            return self.documents[doc_id - 1]
        return None


class CollectionStore:
    """Owns the name -> collection mapping for one process."""

    def __init__(self, *, max_document_chars: int | None = None) -> None:
        self._collections: dict[str, Collection] = {}
        self.max_document_chars = max_document_chars

    def __contains__(self, name: object) -> bool:
        return name in self._collections

    def __len__(self) -> int:
        return len(self._collections)

    def collection_names(self) -> list[str]:
        """Collection names in creation order."""
        return list(self._collections)

    def create_collection(self, name: str) -> None:
        validate_identifier(name)
        if name in self._collections:
            raise CollectionAlreadyExistsError(name)
        self._collections[name] = Collection(name=name)
        logger.info("Created collection %s", name)

    def insert_document(self, name: str, text: str) -> int:
        """Append ``text`` to collection ``name`` and return the assigned id."""
        collection = self._resolve(name)
        if self.max_document_chars is not None and len(text) > self.max_document_chars:
            msg = f"Document has {len(text)} characters; the limit is {self.max_document_chars}"
            raise InvalidDocumentError(msg)
        document = collection.append(text)
        logger.info(
            "Inserted document %d into %s",
            document.doc_id,
            name,
            extra={"collection": name, "doc_id": document.doc_id, "words": len(collection.index)},
        )
        return document.doc_id

    def get_collection(self, name: str) -> CollectionView:
        return self._resolve(name).view()

    def _resolve(self, name: str) -> Collection:
        validate_identifier(name)
        collection = self._collections.get(name)
        if collection is None:
            raise CollectionNotFoundError(name)
        return collection
