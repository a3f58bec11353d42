"""Corpus statistics for a passage index."""

from __future__ import annotations

from scripture_engine.core.models import CorpusStats

from .passage_index import PassageIndex


def compute_stats(index: PassageIndex) -> CorpusStats:
    """Count distinct verses, books and (book, chapter) pairs."""
    chapter_keys = index.chapter_keys()
    return CorpusStats(
        total_verses=len(index),
        total_books=len(index.books()),
        total_chapters=len(chapter_keys),
    )


__all__ = ["compute_stats"]
