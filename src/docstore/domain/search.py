"""Domain models for query results.

Results are immutable value objects. An empty ``results`` list is the
"no documents found" answer, never an error.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


QueryKind = Literal["all", "keyword", "range", "proximity"]


class SearchHit(BaseModel):
    """Value object for a single matching document."""

    model_config = ConfigDict(frozen=True)

    doc_id: int
    text: str


class SearchResponse(BaseModel):
    """Ordered result of one query against one collection.

    ``terms`` holds the normalized query words in the order they were given
    (after range bounds have been swapped into ascending order).
    """

    model_config = ConfigDict(frozen=True)

    collection: str
    kind: QueryKind
    terms: tuple[str, ...] = ()
    distance: int | None = None
    results: list[SearchHit] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.results

    @property
    def doc_ids(self) -> list[int]:
        return [hit.doc_id for hit in self.results]


class PostingEntry(BaseModel):
    """Positions of one word inside one document."""

    model_config = ConfigDict(frozen=True)

    doc_id: int
    positions: tuple[int, ...]


class IndexEntry(BaseModel):
    """One word of the index with its postings in ascending document order."""

    model_config = ConfigDict(frozen=True)

    word: str
    postings: tuple[PostingEntry, ...]


class IndexDump(BaseModel):
    """Ordered snapshot of a collection's inverted index."""

    model_config = ConfigDict(frozen=True)

    collection: str
    entries: tuple[IndexEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def as_tuples(self) -> list[tuple[str, list[tuple[int, list[int]]]]]:
        """Return the dump as plain ``(word, [(doc_id, [positions])])`` tuples."""
        return [
            (entry.word, [(posting.doc_id, list(posting.positions)) for posting in entry.postings])
            for entry in self.entries
        ]
