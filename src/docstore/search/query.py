"""Query engine over a collection's documents and inverted index.

Four query shapes are supported: every document, an exact keyword, an
inclusive alphabetical word range and a bounded-distance pair of words. All of
them resolve the collection through the store and only read from it.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging
from typing import TYPE_CHECKING

from docstore.domain.model import InvalidQueryError
from docstore.domain.search import IndexDump, IndexEntry, PostingEntry, SearchHit, SearchResponse


if TYPE_CHECKING:
    from docstore.service_layer.store import CollectionStore, CollectionView


logger = logging.getLogger(__name__)

_QUOTE_CHARS = ('"', "'")


def normalize_query_word(raw: str | None) -> str:
    """Trim, drop one pair of matching surrounding quotes, lowercase."""
    if raw is None:
        return ""
    word = raw.strip()
    if len(word) >= 2 and word[0] == word[-1] and word[0] in _QUOTE_CHARS:
        word = word[1:-1]
    return word.lower()


def within_distance(first: Sequence[int], second: Sequence[int], distance: int) -> bool:
    """Return True when any position in ``first`` is within ``distance`` of any in ``second``.

    Both sequences must be strictly ascending. The sweep advances whichever
    pointer sits on the smaller position, so the cost is linear in the
    combined length.
    """
    i = j = 0
    while i < len(first) and j < len(second):
        left = first[i]
        right = second[j]
        if abs(left - right) <= distance:
            return True
        if left < right:
            i += 1
        else:
            j += 1
    return False


def _hits(view: CollectionView, doc_ids: Iterable[int]) -> list[SearchHit]:
    # index ids are dense and 1-based over the same live document list
    documents = view.documents
    return [SearchHit(doc_id=doc_id, text=documents[doc_id - 1].text) for doc_id in doc_ids]


class QueryEngine:
    """Answers read-only queries against collections held by a store."""

    def __init__(self, store: CollectionStore) -> None:
        self.store = store

    def all_documents(self, collection: str) -> SearchResponse:
        view = self.store.get_collection(collection)
        results = [SearchHit(doc_id=doc.doc_id, text=doc.text) for doc in view.documents]
        return SearchResponse(collection=collection, kind="all", results=results)

    def keyword(self, collection: str, word: str) -> SearchResponse:
        view = self.store.get_collection(collection)
        term = normalize_query_word(word)
        doc_ids = view.index.doc_ids(term) if term else []
        logger.debug("Keyword %r matched %d documents in %s", term, len(doc_ids), collection)
        return SearchResponse(collection=collection, kind="keyword", terms=(term,), results=_hits(view, doc_ids))

    def range(self, collection: str, low: str, high: str) -> SearchResponse:
        view = self.store.get_collection(collection)
        lower = normalize_query_word(low)
        upper = normalize_query_word(high)
        if lower > upper:
            lower, upper = upper, lower
        if not lower or not upper:
            return SearchResponse(collection=collection, kind="range", terms=(lower, upper))

        matched: set[int] = set()
        words = view.index.words_between(lower, upper)
        for word in words:
            matched.update(view.index.doc_ids(word))
        logger.debug(
            "Range [%r, %r] covered %d words and %d documents in %s",
            lower,
            upper,
            len(words),
            len(matched),
            collection,
        )
        return SearchResponse(
            collection=collection,
            kind="range",
            terms=(lower, upper),
            results=_hits(view, sorted(matched)),
        )

    def proximity(self, collection: str, first: str, distance: int, second: str) -> SearchResponse:
        if distance < 0:
            msg = f"Distance must be a non-negative integer, got {distance}"
            raise InvalidQueryError(msg)
        view = self.store.get_collection(collection)
        left = normalize_query_word(first)
        right = normalize_query_word(second)
        terms = (left, right)
        if left not in view.index or right not in view.index:
            return SearchResponse(collection=collection, kind="proximity", terms=terms, distance=distance)

        candidates = set(view.index.doc_ids(right))
        matched: list[int] = []
        for doc_id in view.index.doc_ids(left):
            if doc_id not in candidates:
                continue
            if within_distance(view.index.positions(left, doc_id), view.index.positions(right, doc_id), distance):
                matched.append(doc_id)
        logger.debug("Proximity %r <%d %r matched %d documents in %s", left, distance, right, len(matched), collection)
        return SearchResponse(
            collection=collection,
            kind="proximity",
            terms=terms,
            distance=distance,
            results=_hits(view, matched),
        )

    def dump_index(self, collection: str) -> IndexDump:
        view = self.store.get_collection(collection)
        entries = tuple(
            IndexEntry(
                word=word,
                postings=tuple(
                    PostingEntry(doc_id=posting.doc_id, positions=tuple(posting.positions)) for posting in postings
                ),
            )
            for word, postings in view.index.entries()
        )
        return IndexDump(collection=collection, entries=entries)
