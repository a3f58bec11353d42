"""Canonical book names, alias table, and book-name normalization.

Aliases cover full names, common abbreviations (with or without a trailing
period) and numbered books written as ``"1 John"``, ``"1John"``, ``"1 Jn"`` or
``"I John"``. The leading number is always part of the book token.
"""
from __future__ import annotations

import re
from typing import Dict, Iterable, List, Tuple

# Protestant canon in canonical order; positions double as 1-based book ids.
CANONICAL_BOOKS: Tuple[str, ...] = (
    # Pentateuch
    "Genesis", "Exodus", "Leviticus", "Numbers", "Deuteronomy",
    # History
    "Joshua", "Judges", "Ruth", "1 Samuel", "2 Samuel", "1 Kings", "2 Kings",
    "1 Chronicles", "2 Chronicles", "Ezra", "Nehemiah", "Esther",
    # Poetry/Wisdom
    "Job", "Psalms", "Proverbs", "Ecclesiastes", "Song of Songs",
    # Major Prophets
    "Isaiah", "Jeremiah", "Lamentations", "Ezekiel", "Daniel",
    # Minor Prophets
    "Hosea", "Joel", "Amos", "Obadiah", "Jonah", "Micah", "Nahum", "Habakkuk",
    "Zephaniah", "Haggai", "Zechariah", "Malachi",
    # Gospels/Acts
    "Matthew", "Mark", "Luke", "John", "Acts",
    # Paul's Epistles
    "Romans", "1 Corinthians", "2 Corinthians", "Galatians", "Ephesians",
    "Philippians", "Colossians", "1 Thessalonians", "2 Thessalonians",
    "1 Timothy", "2 Timothy", "Titus", "Philemon",
    # General Epistles + Revelation
    "Hebrews", "James", "1 Peter", "2 Peter", "1 John", "2 John", "3 John",
    "Jude", "Revelation",
)

_BOOK_RANK: Dict[str, int] = {name: i for i, name in enumerate(CANONICAL_BOOKS)}

# Abbreviations for unnumbered books (keys already lowercase, no periods).
_ABBREVIATIONS: Dict[str, Tuple[str, ...]] = {
    "Genesis": ("gen", "gn", "ge"),
    "Exodus": ("ex", "exo", "exod"),
    "Leviticus": ("lev", "lv", "le"),
    "Numbers": ("num", "nm", "nu", "numb"),
    "Deuteronomy": ("deut", "dt", "deu", "de"),
    "Joshua": ("josh", "jos", "jsh"),
    "Judges": ("judg", "jdg", "jg", "jdgs"),
    "Ruth": ("ru", "rth", "rut"),
    "Ezra": ("ezr",),
    "Nehemiah": ("neh", "ne"),
    "Esther": ("esth", "est", "es"),
    "Job": ("jb",),
    "Psalms": ("ps", "psa", "psalm", "pss", "psm"),
    "Proverbs": ("prov", "pr", "prv", "pro", "proverb"),
    "Ecclesiastes": ("eccl", "ecc", "ec", "eccles", "qoh", "qoheleth"),
    "Song of Songs": (
        "song", "song of solomon", "sos", "ss", "canticles", "cant", "sg", "songs",
    ),
    "Isaiah": ("isa", "is"),
    "Jeremiah": ("jer", "je", "jr"),
    "Lamentations": ("lam", "la"),
    "Ezekiel": ("ezek", "eze", "ezk"),
    "Daniel": ("dan", "dn", "da"),
    "Hosea": ("hos", "ho"),
    "Joel": ("jl", "joe"),
    "Amos": ("am", "amo"),
    "Obadiah": ("obad", "ob", "oba"),
    "Jonah": ("jon", "jnh"),
    "Micah": ("mic", "mi"),
    "Nahum": ("nah", "na"),
    "Habakkuk": ("hab", "hb"),
    "Zephaniah": ("zeph", "zep", "zp"),
    "Haggai": ("hag", "hg"),
    "Zechariah": ("zech", "zec", "zc"),
    "Malachi": ("mal", "ml"),
    "Matthew": ("matt", "mt", "mat"),
    "Mark": ("mk", "mr", "mrk", "mar"),
    "Luke": ("lk", "lu", "luk"),
    "John": ("jn", "jhn", "joh"),
    "Acts": ("ac", "act"),
    "Romans": ("rom", "ro", "rm"),
    "Galatians": ("gal", "ga"),
    "Ephesians": ("eph", "ep", "ephes"),
    "Philippians": ("phil", "php", "pp"),
    "Colossians": ("col",),
    "Titus": ("tit",),
    "Philemon": ("philem", "phlm", "phm", "pm"),
    "Hebrews": ("heb",),
    "James": ("jas", "jm", "ja"),
    "Jude": ("jd", "jud"),
    "Revelation": ("rev", "re", "rv", "apoc", "apocalypse", "revelations"),
}

# Stems for numbered books; "1 sam", "2 sam", ... are generated from these.
_NUMBERED_STEMS: Dict[str, Tuple[str, ...]] = {
    "Samuel": ("samuel", "sam", "sa", "sm"),
    "Kings": ("kings", "kgs", "ki", "kin", "kg"),
    "Chronicles": ("chronicles", "chron", "chr", "ch"),
    "Corinthians": ("corinthians", "cor", "co"),
    "Thessalonians": ("thessalonians", "thess", "thes", "th"),
    "Timothy": ("timothy", "tim", "ti"),
    "Peter": ("peter", "pet", "pe", "pt"),
    "John": ("john", "jn", "jo", "joh", "jhn"),
}

_ROMAN_PREFIX_RE = re.compile(r"^(iii|ii|i)\s+(?=[a-z])")
_DIGIT_PREFIX_RE = re.compile(r"^([123])\s*(?=[a-z])")
_ROMAN_TO_DIGIT = {"i": "1", "ii": "2", "iii": "3"}


def alias_key(name: str) -> str:
    """Return the lookup key for ``name``.

    Lowercases, drops periods, collapses whitespace and rewrites Roman-numeral
    or unspaced numeric prefixes so ``"I Jn."`` and ``"1Jn"`` both become ``"1 jn"``.
    """
    key = name.lower().replace(".", " ").strip()
    key = re.sub(r"\s+", " ", key)
    key = _ROMAN_PREFIX_RE.sub(lambda m: f"{_ROMAN_TO_DIGIT[m.group(1)]} ", key)
    key = _DIGIT_PREFIX_RE.sub(r"\1 ", key)
    return key


def _build_aliases() -> Dict[str, str]:
    aliases: Dict[str, str] = {}
    for canonical in CANONICAL_BOOKS:
        aliases[alias_key(canonical)] = canonical
    for canonical, abbrs in _ABBREVIATIONS.items():
        for abbr in abbrs:
            aliases[abbr] = canonical
    for canonical in CANONICAL_BOOKS:
        number, _, stem_name = canonical.partition(" ")
        if not number.isdigit():
            continue
        for stem in _NUMBERED_STEMS[stem_name]:
            aliases[f"{number} {stem}"] = canonical
    return aliases


BOOK_ALIASES: Dict[str, str] = _build_aliases()


def book_rank(name: str) -> int:
    """Canonical position of ``name``; unknown names rank after every canonical book."""
    return _BOOK_RANK.get(name, len(CANONICAL_BOOKS))


def canonical_sort_key(name: str) -> Tuple[int, str]:
    """Sort key ordering canonical books first, then unknown names alphabetically."""
    return book_rank(name), name


def book_by_id(book_id: int) -> str | None:
    """Return the canonical name for a 1-based book id, or None when out of range."""
    if 1 <= book_id <= len(CANONICAL_BOOKS):
        return CANONICAL_BOOKS[book_id - 1]
    return None


def lookup_alias(name: str) -> str | None:
    """Return the canonical name for ``name`` from the alias table only."""
    return BOOK_ALIASES.get(alias_key(name))


def normalize_book_name(name: str, available: Iterable[str] | None = None) -> str:
    """Normalize a book alias to the name used by an index.

    Resolution order:
    1. alias-table match;
    2. case-insensitive exact match against ``available``;
    3. case-insensitive prefix match against ``available`` (canonical order);
    4. the input, unchanged.

    An unresolved name is signalled only by its absence from any index.
    """
    canonical = lookup_alias(name)
    if canonical is not None:
        return canonical

    key = alias_key(name)
    if not key or available is None:
        return name

    candidates: List[str] = sorted(set(available), key=canonical_sort_key)
    stripped = name.strip().lower()
    for candidate in candidates:
        lowered = candidate.lower()
        if lowered in (stripped, key):
            return candidate
    if not any(ch.isalpha() for ch in key):
        # A bare number is a chapter, not the start of "1 John".
        return name
    for candidate in candidates:
        if alias_key(candidate).startswith(key):
            return candidate
    return name


__all__ = [
    "BOOK_ALIASES",
    "CANONICAL_BOOKS",
    "alias_key",
    "book_by_id",
    "book_rank",
    "canonical_sort_key",
    "lookup_alias",
    "normalize_book_name",
]
