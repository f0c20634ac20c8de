"""Analyzer utilities for the document store.

Text is turned into tokens by a composable tokenizer/filter pipeline. The
default pipeline splits on anything that is not an ASCII letter, digit or
underscore and lowercases the result. Positions count tokens, not characters,
and start at 1.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
import re
from typing import Protocol


FIRST_POSITION = 1

_WORD_PATTERN = r"[A-Za-z0-9_]+"


@dataclass
class Token:
    """Represents a token emitted by analyzers."""

    text: str
    position: int
    start_char: int
    end_char: int

    def copy_with(self, **updates: object) -> Token:
        data = {
            "text": self.text,
            "position": self.position,
            "start_char": self.start_char,
            "end_char": self.end_char,
        }
        data.update(updates)
        return Token(**data)  # type: ignore[arg-type]


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class RegexTokenizer:
    """Regex-based tokenizer that yields word tokens."""

    def __init__(self, pattern: str = _WORD_PATTERN, flags: int = re.ASCII) -> None:
        self.pattern = re.compile(pattern, flags)

    def __call__(self, text: str) -> Iterator[Token]:
        for position, match in enumerate(self.pattern.finditer(text), start=FIRST_POSITION):
            yield Token(
                text=match.group(0),
                position=position,
                start_char=match.start(),
                end_char=match.end(),
            )


class LowercaseFilter:
    """Filter that lowercases token text."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            lowered = token.text.lower()
            if lowered == token.text:
                yield token
            else:
                yield token.copy_with(text=lowered)


class AnalyzerPipeline:
    """Composable analyzer pipeline (tokenizer + filters)."""

    def __init__(self, tokenizer: Tokenizer, filters: Sequence[TokenFilter] | None = None) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])

    def __call__(self, text: str) -> list[Token]:
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        tokens = list(stream)
        # positions stay dense if a filter ever drops tokens
        for idx, token in enumerate(tokens, start=FIRST_POSITION):
            token.position = idx
        return tokens


class StandardAnalyzer:
    """Default analyzer used when documents are inserted."""

    def __init__(self) -> None:
        self.pipeline = AnalyzerPipeline(RegexTokenizer(), [LowercaseFilter()])

    def __call__(self, text: str) -> list[Token]:
        return self.pipeline(text)


_DEFAULT_ANALYZER = StandardAnalyzer()


def tokenize(text: str) -> list[tuple[str, int]]:
    """Split ``text`` into ``(word, position)`` pairs.

    Words are maximal runs of ASCII letters, digits or underscore, lowercased.
    Positions are 1-based and advance by one per token.
    """

    return [(token.text, token.position) for token in _DEFAULT_ANALYZER(text)]
