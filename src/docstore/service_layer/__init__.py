"""Service layer - the store and the use cases run against it."""

from docstore.service_layer.services import (
    create_collection,
    insert_document,
    print_index,
    search_all,
    search_keyword,
    search_proximity,
    search_range,
)
from docstore.service_layer.store import Collection, CollectionStore, CollectionView


__all__ = [
    "Collection",
    "CollectionStore",
    "CollectionView",
    "create_collection",
    "insert_document",
    "print_index",
    "search_all",
    "search_keyword",
    "search_proximity",
    "search_range",
]
