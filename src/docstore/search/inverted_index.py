"""Positional inverted index for a single collection.

The index keeps three nested levels: word -> document id -> positions.

* Positions for a ``(word, doc_id)`` pair are appended in the order the
  tokenizer emits them, which is strictly ascending. No sort is ever needed
  as long as a document is indexed in one left-to-right pass.
* Document ids under a word are appended in insertion order. Ids are assigned
  monotonically by the collection, so the per-word mapping is ascending too.
* The word level is a plain dict plus a sorted word list maintained with
  ``bisect.insort``, so range scans use bounds instead of a full sort.

Query code only ever sees an :class:`IndexReader`. Positions leave the index
as tuples, so nothing outside :meth:`InvertedIndex.add_document` can reorder
or extend them.
"""

from __future__ import annotations

from array import array
from bisect import bisect_left, bisect_right, insort
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
import logging

from docstore.search.analyzers import tokenize


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Posting:
    """Occurrences of a word inside one document."""

    doc_id: int
    positions: tuple[int, ...]


class InvertedIndex:
    """Word -> document -> ascending positions mapping."""

    def __init__(self) -> None:
        self._terms: dict[str, dict[int, array]] = {}
        self._sorted_words: list[str] = []
        self._last_doc_id = 0

    def __len__(self) -> int:
        return len(self._terms)

    def __contains__(self, word: object) -> bool:
        return word in self._terms

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IndexReader):
            other = other._index
        if not isinstance(other, InvertedIndex):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"InvertedIndex(words={len(self._terms)}, last_doc_id={self._last_doc_id})"

    @property
    def last_doc_id(self) -> int:
        return self._last_doc_id

    def reader(self) -> IndexReader:
        """Read-only handle over this index."""
        return IndexReader(self)

    def add_document(self, doc_id: int, tokens: Iterable[tuple[str, int]]) -> None:
        """Append every ``(word, position)`` of a freshly inserted document.

        ``tokens`` must come from a single tokenization pass so positions
        arrive in ascending order.
        """
        if doc_id <= self._last_doc_id:
            msg = f"Document ids must increase: got {doc_id} after {self._last_doc_id}"
            raise ValueError(msg)

        for word, position in tokens:
            documents = self._terms.get(word)
            if documents is None:
                documents = {}
                self._terms[word] = documents
                insort(self._sorted_words, word)
            positions = documents.get(doc_id)
            if positions is None:
                positions = array("I")
                documents[doc_id] = positions
            positions.append(position)

        self._last_doc_id = doc_id

    def words(self) -> list[str]:
        """All indexed words in ascending order."""
        return list(self._sorted_words)

    def words_between(self, low: str, high: str) -> list[str]:
        """Indexed words ``w`` with ``low <= w <= high``."""
        if low > high:
            return []
        start = bisect_left(self._sorted_words, low)
        end = bisect_right(self._sorted_words, high)
        return self._sorted_words[start:end]

    def doc_ids(self, word: str) -> list[int]:
        """Ascending ids of documents containing ``word``."""
        return list(self._terms.get(word, {}))

    def positions(self, word: str, doc_id: int) -> tuple[int, ...]:
        """Ascending positions of ``word`` inside ``doc_id`` (empty when absent)."""
        documents = self._terms.get(word)
        if documents is None or doc_id not in documents:
            return ()
        return tuple(documents[doc_id])

    def postings(self, word: str) -> list[Posting]:
        """Postings for ``word`` in ascending document order."""
        documents = self._terms.get(word, {})
        return [Posting(doc_id=doc_id, positions=tuple(positions)) for doc_id, positions in documents.items()]

    def entries(self) -> Iterator[tuple[str, list[Posting]]]:
        """Iterate ``(word, postings)`` in ascending word order."""
        for word in self._sorted_words:
            yield word, self.postings(word)

    def to_dict(self) -> dict[str, dict[int, list[int]]]:
        return {
            word: {doc_id: list(positions) for doc_id, positions in self._terms[word].items()}
            for word in self._sorted_words
        }

    @classmethod
    def rebuild(cls, documents: Iterable[tuple[int, str]]) -> InvertedIndex:
        """Build a fresh index from ``(doc_id, text)`` pairs in insertion order."""
        index = cls()
        count = 0
        for doc_id, text in documents:
            index.add_document(doc_id, tokenize(text))
            count += 1
        logger.debug("Rebuilt index from %d documents (%d words)", count, len(index))
        return index


class IndexReader:
    """Read-only view of an :class:`InvertedIndex` handed out to query code.

    The view is live: documents inserted after it was created are visible.
    """

    __slots__ = ("_index",)

    def __init__(self, index: InvertedIndex) -> None:
        self._index = index

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, word: object) -> bool:
        return word in self._index

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IndexReader):
            other = other._index
        return self._index == other

    def __repr__(self) -> str:
        return f"IndexReader({self._index!r})"

    def words(self) -> list[str]:
        return self._index.words()

    def words_between(self, low: str, high: str) -> list[str]:
        return self._index.words_between(low, high)

    def doc_ids(self, word: str) -> list[int]:
        return self._index.doc_ids(word)

    def positions(self, word: str, doc_id: int) -> tuple[int, ...]:
        return self._index.positions(word, doc_id)

    def postings(self, word: str) -> list[Posting]:
        return self._index.postings(word)

    def entries(self) -> Iterator[tuple[str, list[Posting]]]:
        return self._index.entries()

    def to_dict(self) -> dict[str, dict[int, list[int]]]:
        return self._index.to_dict()
