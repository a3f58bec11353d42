"""Parsers turning raw scripture payloads into verse records.

Three record shapes are understood:

- ``lines``: ``"Book chapter:verse text"``, one verse per line, matched against
  :data:`LINE_GRAMMARS` in order;
- ``delimited``: ``book,chapter,verse,text`` rows (comma, tab or pipe; CSV quoting);
- ``json``: nested ``books -> chapters -> verses`` maps, or flat verse records.

Malformed records are skipped and counted. A payload that cannot be read at all
raises :class:`IngestionError`.
"""
from __future__ import annotations

import csv
import io
import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError

from scripture_engine.core.exceptions import IngestionError, UnsupportedFormatError
from scripture_engine.core.logging import get_logger
from scripture_engine.core.models import Verse
from scripture_engine.utils.books import book_by_id, lookup_alias

logger = get_logger(__name__)

RawRecord = Tuple[Any, Any, Any, Any]


class PayloadFormat(str, Enum):
    """Record shapes accepted by :func:`parse_payload`."""

    LINES = "lines"
    DELIMITED = "delimited"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class LineGrammar:
    """One named pattern for line-oriented verse text."""

    name: str
    pattern: re.Pattern[str]

    def match(self, line: str) -> RawRecord | None:
        """Return ``(book, chapter, verse, text)`` when ``line`` fits this grammar."""
        found = self.pattern.match(line.strip())
        if not found:
            return None
        return (
            found.group("book"),
            found.group("chapter"),
            found.group("verse"),
            found.group("text"),
        )


# Tried in order; the first grammar that matches a line wins.
LINE_GRAMMARS: Tuple[LineGrammar, ...] = (
    # "Genesis 1:1 In the beginning...", "1 John 3:16 ...", "Song of Songs 2:1 ..."
    LineGrammar(
        "standard",
        re.compile(
            r"^(?P<book>(?:[1-3]\s)?[A-Za-z][A-Za-z ]*?)\s+"
            r"(?P<chapter>\d+):(?P<verse>\d+)\s+(?P<text>\S.*)$"
        ),
    ),
    # "1John 3:16 ..."
    LineGrammar(
        "compact_numbered",
        re.compile(
            r"^(?P<book>[1-3][A-Za-z]+)\s+(?P<chapter>\d+):(?P<verse>\d+)\s+(?P<text>\S.*)$"
        ),
    ),
    # "Gen. 1:1 ...", "1 Cor. 13:4 ..."
    LineGrammar(
        "abbreviated",
        re.compile(
            r"^(?P<book>(?:[1-3]\s?)?[A-Za-z][A-Za-z .]*?)\.?\s*"
            r"(?P<chapter>\d+):(?P<verse>\d+)\s+(?P<text>\S.*)$"
        ),
    ),
)

_DELIMITERS = (",", "\t", "|")


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def _canonical_book(value: Any) -> Optional[str]:
    if isinstance(value, int) and not isinstance(value, bool):
        return book_by_id(value)
    if not isinstance(value, str):
        return None
    name = re.sub(r"\s+", " ", value).strip()
    if not name:
        return None
    return lookup_alias(name) or name


def make_verse(book: Any, chapter: Any, verse: Any, text: Any) -> Verse | None:
    """Build a :class:`Verse` from loosely typed fields, or None when invalid."""
    book_name = _canonical_book(book)
    chapter_num = _to_int(chapter)
    verse_num = _to_int(verse)
    if book_name is None or chapter_num is None or verse_num is None:
        return None
    if not isinstance(text, str):
        return None
    try:
        return Verse(book=book_name, chapter=chapter_num, verse=verse_num, text=text.strip())
    except ValidationError:
        return None


def match_line(line: str, grammars: Sequence[LineGrammar] = LINE_GRAMMARS) -> RawRecord | None:
    """Return the record from the first grammar matching ``line``."""
    for grammar in grammars:
        record = grammar.match(line)
        if record is not None:
            return record
    return None


def parse_lines(text: str) -> List[Verse]:
    """Parse line-oriented ``"Book chapter:verse text"`` data."""
    verses: List[Verse] = []
    lines = [line for line in text.splitlines() if line.strip()]
    for line in lines:
        record = match_line(line)
        if record is None:
            continue
        verse = make_verse(*record)
        if verse is not None:
            verses.append(verse)
    logger.info("Parsed %d verses from %d lines", len(verses), len(lines))
    return verses


def sniff_delimiter(line: str) -> str:
    """Pick the most frequent of comma, tab and pipe in ``line`` (comma on ties)."""
    counts = [(line.count(d), -i, d) for i, d in enumerate(_DELIMITERS)]
    best = max(counts)
    return best[2] if best[0] > 0 else ","


def parse_delimited(text: str) -> List[Verse]:
    """Parse ``book,chapter,verse,text`` rows; a header row is skipped as malformed."""
    first_line = next((line for line in text.splitlines() if line.strip()), "")
    delimiter = sniff_delimiter(first_line)
    reader = csv.reader(io.StringIO(text), delimiter=delimiter)
    verses: List[Verse] = []
    rows = 0
    for row in reader:
        if not row or not any(field.strip() for field in row):
            continue
        rows += 1
        if len(row) < 4:
            continue
        # Columns past the text field (e.g. a version code) are ignored.
        verse = make_verse(row[0], row[1], row[2], row[3])
        if verse is not None:
            verses.append(verse)
    logger.info("Parsed %d verses from %d rows", len(verses), rows)
    return verses


def _enumerate_node(node: Any) -> Iterator[Tuple[Any, Any]]:
    if isinstance(node, Mapping):
        yield from node.items()
    elif isinstance(node, list):
        yield from ((i + 1, item) for i, item in enumerate(node))


def _unwrap(node: Any, key: str) -> Any:
    if isinstance(node, Mapping) and key in node:
        return node[key]
    return node


def _looks_like_record(node: Any) -> bool:
    return isinstance(node, Mapping) and ("text" in node or "verse_text" in node)


def _first_present(record: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = record.get(key)
        if value not in (None, ""):
            return value
    return None


def _from_records(records: Iterable[Any]) -> List[Verse]:
    verses: List[Verse] = []
    for record in records:
        if not isinstance(record, Mapping):
            continue
        book = _first_present(record, ("book_name", "book", "book_id"))
        chapter = _first_present(record, ("chapter", "chapter_id"))
        verse_num = _first_present(record, ("verse", "verse_id"))
        text = _first_present(record, ("text", "verse_text"))
        verse = make_verse(book, chapter, verse_num, text)
        if verse is not None:
            verses.append(verse)
    return verses


def _from_nested(books: Mapping[str, Any]) -> List[Verse]:
    verses: List[Verse] = []
    for book, book_node in books.items():
        chapters = _unwrap(book_node, "chapters")
        for chapter, chapter_node in _enumerate_node(chapters):
            chapter_verses = _unwrap(chapter_node, "verses")
            for verse_num, text in _enumerate_node(chapter_verses):
                verse = make_verse(book, chapter, verse_num, text)
                if verse is not None:
                    verses.append(verse)
    return verses


def parse_json(text: str) -> List[Verse]:
    """Parse nested or flat JSON scripture data."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise IngestionError(f"Invalid JSON payload: {exc}") from exc

    if isinstance(data, list):
        verses = _from_records(data)
    elif not isinstance(data, Mapping):
        raise UnsupportedFormatError("JSON payload is neither an object nor a list")
    elif isinstance(data.get("books"), Mapping):
        verses = _from_nested(data["books"])
    elif isinstance(data.get("verses"), (Mapping, list)):
        node = data["verses"]
        if isinstance(node, list):
            verses = _from_records(node)
        elif any(_looks_like_record(value) for value in node.values()):
            verses = _from_records(node.values())
        else:
            verses = _from_nested(node)
    else:
        verses = _from_nested(data)
        if not verses:
            raise UnsupportedFormatError(
                "JSON payload is missing a 'books' or 'verses' property; "
                f"top-level keys: {sorted(map(str, data.keys()))[:10]}"
            )
    logger.info("Parsed %d verses from JSON payload", len(verses))
    return verses


def decode_payload(payload: str | bytes) -> str:
    """Return text for ``payload``, decoding bytes as UTF-8 (BOM tolerated)."""
    if isinstance(payload, bytes):
        return payload.decode("utf-8-sig", errors="replace")
    return payload.lstrip("\ufeff")


def detect_format(text: str) -> PayloadFormat:
    """Guess the record shape of ``text``."""
    stripped = text.lstrip()
    if stripped.startswith(("{", "[")):
        return PayloadFormat.JSON
    first_line = next((line for line in stripped.splitlines() if line.strip()), "")
    if match_line(first_line) is not None:
        return PayloadFormat.LINES
    delimiter = sniff_delimiter(first_line)
    if len(next(csv.reader([first_line], delimiter=delimiter), [])) >= 4:
        return PayloadFormat.DELIMITED
    return PayloadFormat.LINES


def parse_payload(
    payload: str | bytes, payload_format: PayloadFormat | str | None = None
) -> List[Verse]:
    """Parse ``payload`` in the given format, detecting it when not supplied."""
    text = decode_payload(payload)
    if payload_format is None:
        fmt = detect_format(text)
    else:
        try:
            fmt = PayloadFormat(payload_format)
        except ValueError as exc:
            raise UnsupportedFormatError(f"Unsupported format: {payload_format}") from exc

    if fmt is PayloadFormat.JSON:
        return parse_json(text)
    if fmt is PayloadFormat.DELIMITED:
        return parse_delimited(text)
    return parse_lines(text)


__all__ = [
    "LINE_GRAMMARS",
    "LineGrammar",
    "PayloadFormat",
    "decode_payload",
    "detect_format",
    "make_verse",
    "match_line",
    "parse_delimited",
    "parse_json",
    "parse_lines",
    "parse_payload",
    "sniff_delimiter",
]
