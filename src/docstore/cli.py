"""Interactive command loop for the in-memory document store."""

# ruff: noqa: T201  # CLI intentionally prints command output

from __future__ import annotations

import argparse
from collections.abc import Iterable, Sequence
import logging
from pathlib import Path
import sys
from typing import TextIO

from pydantic import ValidationError

from docstore.commands import StatementBuffer, run_statement
from docstore.config import Settings
from docstore.observability import bind_statement, configure_logging
from docstore.service_layer.store import CollectionStore


logger = logging.getLogger(__name__)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="In-memory document store with positional full-text search",
    )
    parser.add_argument(
        "--script",
        type=Path,
        help="Read statements from this file instead of standard input",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        help="Override DOCSTORE_LOG_LEVEL",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=None,
        help="Emit structured JSON logs on stderr",
    )
    return parser


def run_session(
    lines: Iterable[str],
    store: CollectionStore,
    settings: Settings,
    *,
    out: TextIO,
    interactive: bool = False,
) -> int:
    """Feed ``lines`` through the statement buffer until input ends or exit is requested.

    The exit command is honoured anywhere outside an open quoted string; a
    statement left unterminated at that point is reported and discarded.

    Returns the number of statements executed.
    """
    buffer = StatementBuffer()
    executed = 0

    def prompt() -> None:
        if interactive:
            print(settings.continuation_prompt if buffer.pending else settings.prompt, end="", file=out, flush=True)

    if interactive:
        print(settings.banner, file=out)
    prompt()
    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        if not buffer.in_quote and settings.is_exit_command(line):
            break
        for statement in buffer.feed(line):
            with bind_statement():
                print(run_statement(store, statement), file=out)
            executed += 1
        prompt()

    leftover = buffer.reset()
    if leftover:
        logger.warning("Discarding unterminated statement: %s", leftover)
        print(f"Error: statement not terminated with ';': {leftover}", file=out)
    return executed


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    configure_logging(
        args.log_level or settings.log_level,
        settings.log_json if args.json_logs is None else args.json_logs,
    )
    store = CollectionStore(max_document_chars=settings.max_document_chars)

    if args.script is not None:
        try:
            with args.script.open(encoding="utf-8") as handle:
                executed = run_session(handle, store, settings, out=sys.stdout)
        except OSError as exc:
            logger.error("Cannot read script %s: %s", args.script, exc)
            return 1
    else:
        executed = run_session(sys.stdin, store, settings, out=sys.stdout, interactive=sys.stdin.isatty())

    logger.info("Session finished after %d statements", executed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
