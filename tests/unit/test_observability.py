"""Unit tests for observability module."""

import io
import json
import logging
import sys

import pytest

from docstore.observability import (
    JsonFormatter,
    bind_statement,
    configure_logging,
    get_statement_context,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def _record(msg: str = "test message", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="docstore.service_layer.store",
        level=logging.INFO,
        pathname="store.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
class TestJsonFormatter:
    """Tests for structured JSON logging."""

    def test_format_includes_core_fields(self):
        output = json.loads(JsonFormatter().format(_record()))

        assert output["message"] == "test message"
        assert output["level"] == "INFO"
        assert output["logger"] == "docstore.service_layer.store"
        assert output["component"] == "store"
        assert "timestamp" in output

    def test_format_includes_statement_context(self):
        with bind_statement(source="script") as statement_id:
            output = json.loads(JsonFormatter().format(_record()))

        assert output["statement_id"] == statement_id
        assert output["source"] == "script"

    def test_extra_fields_are_serialized(self):
        output = json.loads(JsonFormatter().format(_record(collection="docs", doc_id=3, tags={"b", "a"})))

        assert output["collection"] == "docs"
        assert output["doc_id"] == 3
        assert output["tags"] == ["a", "b"]

    def test_long_values_are_truncated(self):
        formatter = JsonFormatter()

        output = json.loads(formatter.format(_record("x" * 3000, note="y" * 900)))

        assert output["message"].endswith("...")
        assert len(output["message"]) == formatter.MAX_MESSAGE_LEN + 3
        assert len(output["note"]) == formatter.MAX_FIELD_LEN + 3

    def test_exception_info_is_included(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()

        output = json.loads(JsonFormatter().format(record))

        assert "ValueError: boom" in output["exception"]


@pytest.mark.unit
class TestStatementContext:
    def test_empty_outside_statement(self):
        assert get_statement_context() == {}

    def test_bind_statement_resets_on_exit(self):
        with bind_statement() as statement_id:
            assert get_statement_context()["statement_id"] == statement_id
            assert len(statement_id) == 16

        assert get_statement_context() == {}

    def test_nested_statements_restore_the_outer_id(self):
        with bind_statement(source="stdin") as outer:
            with bind_statement() as inner:
                assert get_statement_context() == {"statement_id": inner}

            assert get_statement_context() == {"statement_id": outer, "source": "stdin"}


@pytest.mark.unit
class TestConfigureLogging:
    def test_plain_text_output(self, restore_root_logger):
        stream = io.StringIO()
        configure_logging("info", stream=stream)

        logging.getLogger("docstore.test").info("hello %s", "world")

        assert "INFO [docstore.test] hello world" in stream.getvalue()

    def test_json_output(self, restore_root_logger):
        stream = io.StringIO()
        configure_logging("debug", json_output=True, stream=stream)

        logging.getLogger("docstore.test").debug("structured")

        payload = json.loads(stream.getvalue().strip())
        assert payload["message"] == "structured"
        assert payload["level"] == "DEBUG"

    def test_level_filters_records(self, restore_root_logger):
        stream = io.StringIO()
        configure_logging("warning", stream=stream)

        logging.getLogger("docstore.test").info("hidden")

        assert stream.getvalue() == ""

    def test_logger_level_overrides(self, restore_root_logger):
        stream = io.StringIO()
        configure_logging("warning", stream=stream, logger_levels={"docstore.noisy": "error"})

        assert logging.getLogger("docstore.noisy").level == logging.ERROR
        logging.getLogger("docstore.noisy").setLevel(logging.NOTSET)

    def test_replaces_existing_handlers(self, restore_root_logger):
        configure_logging("info", stream=io.StringIO())
        configure_logging("info", stream=io.StringIO())

        assert len(restore_root_logger.handlers) == 1
