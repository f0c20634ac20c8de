"""Command surface: statement buffering, parsing, dispatch and rendering.

Statements end with ``;`` outside quotes and may span lines::

    CREATE docs;
    INSERT docs "The quick brown fox";
    PRINT_INDEX docs;
    SEARCH docs;
    SEARCH docs WHERE "quick";
    SEARCH docs WHERE "brown" - "fox";
    SEARCH docs WHERE "quick" <1 "fox";

Keywords are case-insensitive. Query words may be quoted with ``"`` or ``'``
or left bare.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re

from docstore.domain.model import DocStoreError
from docstore.domain.search import IndexDump, SearchResponse
from docstore.service_layer import services
from docstore.service_layer.store import CollectionStore


logger = logging.getLogger(__name__)

TERMINATOR = ";"
QUOTES = ('"', "'")

_TERM = r"\"[^\"]*\"|'[^']*'|[^\s\"'<-]+"
_KEYWORD_QUERY = re.compile(rf"(?P<word>{_TERM})")
_RANGE_QUERY = re.compile(rf"(?P<low>{_TERM})\s*-\s*(?P<high>{_TERM})")
_PROXIMITY_QUERY = re.compile(rf"(?P<first>{_TERM})\s*<\s*(?P<distance>\d+)\s*(?P<second>{_TERM})")

NO_RESULTS = "No documents found"
EMPTY_INDEX = "(empty index)"


class CommandSyntaxError(DocStoreError):
    """Raised when a statement cannot be parsed."""


@dataclass(frozen=True, slots=True)
class CreateCollection:
    name: str


@dataclass(frozen=True, slots=True)
class InsertDocument:
    collection: str
    text: str


@dataclass(frozen=True, slots=True)
class PrintIndex:
    collection: str


@dataclass(frozen=True, slots=True)
class SearchAll:
    collection: str


@dataclass(frozen=True, slots=True)
class SearchKeyword:
    collection: str
    word: str


@dataclass(frozen=True, slots=True)
class SearchRange:
    collection: str
    low: str
    high: str


@dataclass(frozen=True, slots=True)
class SearchProximity:
    collection: str
    word1: str
    distance: int
    word2: str


Command = (
    CreateCollection | InsertDocument | PrintIndex | SearchAll | SearchKeyword | SearchRange | SearchProximity
)


class StatementBuffer:
    """Accumulates input lines and hands back complete statements.

    A terminator inside a quoted string does not end the statement, so
    documents may contain ``;``. A quote character only opens a string at the
    start of a term (after whitespace, ``-`` or ``<N``), so a bare word such
    as ``it's`` does not swallow the rest of the input. Line breaks inside a
    statement are kept.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._quote: str | None = None
        self._term_start = True
        self._in_distance = False

    @property
    def pending(self) -> bool:
        """True while an unterminated statement is buffered."""
        return any(part.strip() for part in self._parts)

    @property
    def in_quote(self) -> bool:
        """True while a quoted string is open."""
        return self._quote is not None

    def feed(self, line: str) -> list[str]:
        statements: list[str] = []
        current: list[str] = []
        if self._parts:
            current.append("\n")
            self._term_start = True
            self._in_distance = False
        for char in line:
            if self._quote is not None:
                if char == self._quote:
                    self._quote = None
                    self._term_start = False
                current.append(char)
                continue
            if char == TERMINATOR:
                statement = ("".join(self._parts) + "".join(current)).strip()
                self._parts.clear()
                current = []
                self._term_start = True
                self._in_distance = False
                if statement:
                    statements.append(statement)
                continue
            if char in QUOTES and self._term_start:
                self._quote = char
            self._track_term_start(char)
            current.append(char)
        if current and (self._parts or "".join(current).strip()):
            self._parts.append("".join(current))
        return statements

    def _track_term_start(self, char: str) -> None:
        if char == "<":
            self._in_distance = True
            self._term_start = True
        elif char.isdigit() and self._in_distance:
            self._term_start = True
        else:
            self._in_distance = False
            self._term_start = char.isspace() or char == "-"

    def reset(self) -> str:
        """Drop buffered input and return what was discarded."""
        leftover = "".join(self._parts).strip()
        self._parts.clear()
        self._quote = None
        self._term_start = True
        self._in_distance = False
        return leftover


def _split_head(text: str) -> tuple[str, str]:
    parts = text.split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()


def _single_name(keyword: str, rest: str) -> str:
    if not rest:
        raise CommandSyntaxError(f"{keyword} expects a collection name")
    if len(rest.split()) != 1:
        raise CommandSyntaxError(f"{keyword} expects exactly one collection name, got {rest!r}")
    return rest


def _parse_insert(rest: str) -> InsertDocument:
    name, body = _split_head(rest)
    if not name:
        raise CommandSyntaxError("INSERT expects a collection name and a quoted document")
    if len(body) < 2 or body[0] != '"' or body[-1] != '"':
        raise CommandSyntaxError('INSERT expects the document text in double quotes: INSERT <name> "<text>"')
    return InsertDocument(collection=name, text=body[1:-1])


def _parse_search(rest: str) -> Command:
    name, tail = _split_head(rest)
    if not name:
        raise CommandSyntaxError("SEARCH expects a collection name")
    if not tail:
        return SearchAll(collection=name)

    keyword, query = _split_head(tail)
    if keyword.upper() != "WHERE":
        raise CommandSyntaxError(f"Expected WHERE after SEARCH {name}, got {keyword!r}")
    if not query:
        raise CommandSyntaxError("WHERE expects a query")

    if match := _PROXIMITY_QUERY.fullmatch(query):
        return SearchProximity(
            collection=name,
            word1=match.group("first"),
            distance=int(match.group("distance")),
            word2=match.group("second"),
        )
    if match := _RANGE_QUERY.fullmatch(query):
        return SearchRange(collection=name, low=match.group("low"), high=match.group("high"))
    if match := _KEYWORD_QUERY.fullmatch(query):
        return SearchKeyword(collection=name, word=match.group("word"))
    raise CommandSyntaxError(f"Unrecognized query: {query!r}")


def parse_statement(statement: str) -> Command:
    """Parse one statement (without its terminator) into a command."""
    text = statement.strip()
    if text.endswith(TERMINATOR):
        text = text[:-1].rstrip()
    keyword, rest = _split_head(text)
    if not keyword:
        raise CommandSyntaxError("Empty statement")

    verb = keyword.upper()
    if verb == "CREATE":
        return CreateCollection(name=_single_name(verb, rest))
    if verb == "INSERT":
        return _parse_insert(rest)
    if verb == "PRINT_INDEX":
        return PrintIndex(collection=_single_name(verb, rest))
    if verb == "SEARCH":
        return _parse_search(rest)
    raise CommandSyntaxError(f"Unknown command: {keyword}")


def render_search(response: SearchResponse) -> str:
    if response.is_empty:
        return NO_RESULTS
    return "\n".join(f"[{hit.doc_id}] {hit.text}" for hit in response.results)


def render_index(dump: IndexDump) -> str:
    if dump.is_empty:
        return EMPTY_INDEX
    lines: list[str] = []
    for entry in dump.entries:
        lines.append(f'"{entry.word}":')
        for posting in entry.postings:
            positions = ", ".join(str(position) for position in posting.positions)
            lines.append(f"  {posting.doc_id} -> [{positions}]")
    return "\n".join(lines)


def execute(store: CollectionStore, command: Command) -> str:
    """Run ``command`` against ``store`` and return the text to display."""
    if isinstance(command, CreateCollection):
        services.create_collection(store, command.name)
        return f"Collection {command.name} has been created"
    if isinstance(command, InsertDocument):
        doc_id = services.insert_document(store, command.collection, command.text)
        return f"Document {doc_id} has been added to {command.collection}"
    if isinstance(command, PrintIndex):
        return render_index(services.print_index(store, command.collection))
    if isinstance(command, SearchAll):
        return render_search(services.search_all(store, command.collection))
    if isinstance(command, SearchKeyword):
        return render_search(services.search_keyword(store, command.collection, command.word))
    if isinstance(command, SearchRange):
        return render_search(services.search_range(store, command.collection, command.low, command.high))
    if isinstance(command, SearchProximity):
        return render_search(
            services.search_proximity(store, command.collection, command.word1, command.distance, command.word2)
        )
    raise TypeError(f"Unsupported command: {command!r}")


def run_statement(store: CollectionStore, statement: str) -> str:
    """Parse and execute one statement, turning store errors into a message."""
    try:
        command = parse_statement(statement)
        return execute(store, command)
    except DocStoreError as exc:
        logger.warning("Statement rejected: %s", exc, extra={"error_type": type(exc).__name__})
        return f"Error: {exc}"
