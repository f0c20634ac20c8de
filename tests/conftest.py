"""Shared test fixtures and configuration."""

import os

import pytest

from docstore.service_layer.store import CollectionStore


SCENARIO_DOCUMENTS = [
    "The quick brown fox",
    "A quick fox jumps",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Drop DOCSTORE_* variables and any .env file so settings use their defaults."""
    for key in list(os.environ):
        if key.upper().startswith("DOCSTORE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def store() -> CollectionStore:
    """Fresh, empty store."""
    return CollectionStore()


@pytest.fixture
def docs_store(store: CollectionStore) -> CollectionStore:
    """Store holding collection ``docs`` with the two scenario documents."""
    store.create_collection("docs")
    for text in SCENARIO_DOCUMENTS:
        store.insert_document("docs", text)
    return store
