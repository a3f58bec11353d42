"""Verse-range parsing and canonical formatting.

Supported forms: ``"12"``, ``"3-7"``, ``"1,3,5"``, ``"1-3,5-7"`` and the
whole-chapter sentinels ``"*"`` / ``"all"``. Bad tokens are skipped; parsing
never raises.
"""
from __future__ import annotations

import re
from typing import List, Set

from scripture_engine.core.models import ReferenceRange

WHOLE_CHAPTER_TOKENS = frozenset({"*", "all"})
WHOLE_CHAPTER_SENTINEL = "*"
# Psalm 119 has 176 verses; anything beyond this is clamped.
MAX_VERSE_NUMBER = 200

_RANGE_RE = re.compile(r"^(\d+)\s*[-–—]\s*(\d+)$")
_SINGLE_RE = re.compile(r"^\d+$")


def _expand_token(token: str) -> List[int]:
    if _SINGLE_RE.match(token):
        number = int(token)
        return [number] if 0 < number <= MAX_VERSE_NUMBER else []
    match = _RANGE_RE.match(token)
    if not match:
        return []
    start, end = int(match.group(1)), int(match.group(2))
    if start < 1 or end < start:
        return []
    return list(range(start, min(end, MAX_VERSE_NUMBER) + 1))


def parse_range(text: str | None) -> ReferenceRange:
    """Parse ``text`` into a :class:`ReferenceRange`."""
    if text is None:
        return ReferenceRange()
    stripped = text.strip()
    if stripped.lower() in WHOLE_CHAPTER_TOKENS:
        return ReferenceRange(whole_chapter=True)

    numbers: Set[int] = set()
    for token in stripped.split(","):
        numbers.update(_expand_token(token.strip()))
    return ReferenceRange(verses=tuple(sorted(numbers)))


def verse_numbers(text: str | None) -> List[int]:
    """Sorted, de-duplicated verse numbers in ``text`` (empty for whole chapter)."""
    return list(parse_range(text).verses)


def format_range(reference: ReferenceRange) -> str:
    """Serialize ``reference`` canonically, compressing consecutive runs.

    ``parse_range(format_range(r)) == r`` for every parsed range.
    """
    if reference.whole_chapter:
        return WHOLE_CHAPTER_SENTINEL
    if not reference.verses:
        return ""

    parts: List[str] = []
    start = prev = reference.verses[0]
    for number in reference.verses[1:]:
        if number == prev + 1:
            prev = number
            continue
        parts.append(str(start) if start == prev else f"{start}-{prev}")
        start = prev = number
    parts.append(str(start) if start == prev else f"{start}-{prev}")
    return ",".join(parts)


__all__ = [
    "MAX_VERSE_NUMBER",
    "WHOLE_CHAPTER_SENTINEL",
    "WHOLE_CHAPTER_TOKENS",
    "format_range",
    "parse_range",
    "verse_numbers",
]
