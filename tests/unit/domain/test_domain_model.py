"""Unit tests for domain value objects and errors."""

from pydantic import ValidationError
import pytest

from docstore.domain import (
    CollectionAlreadyExistsError,
    CollectionNotFoundError,
    DocStoreError,
    Document,
    IndexDump,
    IndexEntry,
    InvalidIdentifierError,
    PostingEntry,
    SearchHit,
    SearchResponse,
    is_valid_identifier,
    validate_identifier,
)


pytestmark = pytest.mark.unit


class TestIdentifiers:
    @pytest.mark.parametrize("name", ["a", "abc", "A1", "snake_case_9"])
    def test_valid(self, name):
        assert is_valid_identifier(name)
        assert validate_identifier(name) == name

    @pytest.mark.parametrize("name", ["", "1a", "_a", "a-b", "a b", "a\n", "ünï"])
    def test_invalid(self, name):
        assert not is_valid_identifier(name)
        with pytest.raises(InvalidIdentifierError) as excinfo:
            validate_identifier(name)
        assert excinfo.value.name == name


class TestErrors:
    def test_all_errors_share_a_base(self):
        for error in (InvalidIdentifierError("x"), CollectionAlreadyExistsError("x"), CollectionNotFoundError("x")):
            assert isinstance(error, DocStoreError)

    def test_messages_name_the_collection(self):
        assert str(CollectionAlreadyExistsError("docs")) == "Collection docs already exists"
        assert str(CollectionNotFoundError("docs")) == "Collection docs does not exist"


class TestDocument:
    def test_is_immutable(self):
        document = Document(doc_id=1, text="hello")

        with pytest.raises((AttributeError, TypeError, ValidationError)):
            document.text = "changed"

    def test_id_must_be_positive(self):
        with pytest.raises(ValidationError):
            Document(doc_id=0, text="hello")


class TestSearchResponse:
    def test_empty_response(self):
        response = SearchResponse(collection="docs", kind="keyword", terms=("zebra",))

        assert response.is_empty
        assert response.doc_ids == []

    def test_doc_ids_follow_result_order(self):
        response = SearchResponse(
            collection="docs",
            kind="all",
            results=[SearchHit(doc_id=1, text="a"), SearchHit(doc_id=2, text="b")],
        )

        assert response.doc_ids == [1, 2]

    def test_unknown_kind_is_rejected(self):
        with pytest.raises(ValidationError):
            SearchResponse(collection="docs", kind="boolean")


class TestIndexDump:
    def test_as_tuples(self):
        dump = IndexDump(
            collection="docs",
            entries=(
                IndexEntry(word="fox", postings=(PostingEntry(doc_id=1, positions=(4,)),)),
                IndexEntry(
                    word="quick",
                    postings=(PostingEntry(doc_id=1, positions=(2,)), PostingEntry(doc_id=2, positions=(2, 5))),
                ),
            ),
        )

        assert not dump.is_empty
        assert dump.as_tuples() == [("fox", [(1, [4])]), ("quick", [(1, [2]), (2, [2, 5])])]

    def test_empty(self):
        assert IndexDump(collection="docs").is_empty
