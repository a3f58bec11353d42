"""Case-insensitive substring search over a passage index."""

from __future__ import annotations

from typing import List

from scripture_engine.core.models import Verse

from .passage_index import PassageIndex


def search_index(index: PassageIndex, query: str, limit: int) -> List[Verse]:
    """Return up to ``limit`` verses containing ``query``, in canonical order.

    The query is matched as given, surrounding whitespace included. Blank
    queries and non-positive limits return an empty list.
    """
    if not query.strip() or limit <= 0:
        return []
    needle = query.lower()
    results: List[Verse] = []
    for verse in index.iter_verses():
        if needle in verse.text.lower():
            results.append(verse)
            if len(results) >= limit:
                break
    return results


__all__ = ["search_index"]
