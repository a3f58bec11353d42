"""Utility modules for book names and verse ranges."""

from .books import normalize_book_name
from .verse_ranges import format_range, parse_range

__all__ = ["normalize_book_name", "parse_range", "format_range"]
