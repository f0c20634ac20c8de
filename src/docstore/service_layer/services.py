"""Service layer - one function per operation request.

The command surface resolves a statement into one of these calls. Writes go
through the store, reads through the query engine. Errors propagate to the
caller untouched; an empty search is an empty ``SearchResponse``.
"""

import logging

from docstore.domain.search import IndexDump, SearchResponse
from docstore.search.query import QueryEngine
from docstore.service_layer.store import CollectionStore


logger = logging.getLogger(__name__)


def create_collection(store: CollectionStore, name: str) -> None:
    """Create an empty collection.

    Raises:
        InvalidIdentifierError: ``name`` is not a valid identifier
        CollectionAlreadyExistsError: ``name`` is taken
    """
    store.create_collection(name)


def insert_document(store: CollectionStore, collection: str, text: str) -> int:
    """Insert ``text`` into ``collection`` and return the new document id.

    Raises:
        InvalidIdentifierError: ``collection`` is not a valid identifier
        CollectionNotFoundError: ``collection`` was never created
        InvalidDocumentError: ``text`` exceeds the store's size limit
    """
    return store.insert_document(collection, text)


def print_index(store: CollectionStore, collection: str) -> IndexDump:
    """Snapshot of the collection's index in ascending word and document order."""
    dump = QueryEngine(store).dump_index(collection)
    logger.debug("Dumped %d index entries for %s", len(dump.entries), collection)
    return dump


def search_all(store: CollectionStore, collection: str) -> SearchResponse:
    return QueryEngine(store).all_documents(collection)


def search_keyword(store: CollectionStore, collection: str, word: str) -> SearchResponse:
    return QueryEngine(store).keyword(collection, word)


def search_range(store: CollectionStore, collection: str, low: str, high: str) -> SearchResponse:
    """Documents containing any indexed word between ``low`` and ``high`` inclusive.

    Bounds are swapped when given in descending order.
    """
    return QueryEngine(store).range(collection, low, high)


def search_proximity(
    store: CollectionStore,
    collection: str,
    word1: str,
    distance: int,
    word2: str,
) -> SearchResponse:
    """Documents where ``word1`` and ``word2`` occur at most ``distance`` tokens apart.

    Raises:
        InvalidQueryError: ``distance`` is negative
    """
    return QueryEngine(store).proximity(collection, word1, distance, word2)
