"""Context propagation for correlating log records with the statement being run."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from uuid import uuid4


statement_context: ContextVar[dict | None] = ContextVar("statement_context", default=None)


def generate_statement_id() -> str:
    """Generate a 16-char hex statement ID."""
    return uuid4().hex[:16]


def get_statement_context() -> dict:
    """Get the current statement context, empty outside a statement."""
    return statement_context.get() or {}


@contextmanager
def bind_statement(**extra: object) -> Iterator[str]:
    """Bind a fresh statement id (plus ``extra`` fields) for the duration of the block."""
    statement_id = generate_statement_id()
    token = statement_context.set({"statement_id": statement_id, **extra})
    try:
        yield statement_id
    finally:
        statement_context.reset(token)
