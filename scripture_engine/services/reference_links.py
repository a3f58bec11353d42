"""Links to an external reader for references no tier could resolve."""

from __future__ import annotations

from urllib.parse import quote

from scripture_engine.core.config import config
from scripture_engine.utils.verse_ranges import WHOLE_CHAPTER_TOKENS


def reference_label(book: str, chapter: int, verses: str | None = None) -> str:
    """``"Book ch:verses"``, or ``"Book ch"`` for blank/whole-chapter ranges."""
    label = f"{book.strip()} {chapter}"
    range_text = (verses or "").strip()
    if range_text and range_text.lower() not in WHOLE_CHAPTER_TOKENS:
        label = f"{label}:{range_text}"
    return label


def format_reference_link(
    book: str,
    chapter: int,
    verses: str | None = None,
    version: str | None = None,
    base_url: str | None = None,
) -> str:
    """Return a passage URL such as ``...passage/?search=John%203%3A16&version=NIV``."""
    base = base_url or config.REFERENCE_LINK_BASE_URL
    # Same safe set as JavaScript's encodeURIComponent.
    search = quote(reference_label(book, chapter, verses), safe="!~*'()")
    return f"{base}?search={search}&version={quote(version or config.REFERENCE_LINK_VERSION)}"


__all__ = ["format_reference_link", "reference_label"]
