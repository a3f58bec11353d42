"""Tiered resolver: query providers in priority order, first hit wins.

Every tier call is bounded by ``PROVIDER_TIMEOUT_SECONDS``. A tier that raises
or times out is logged and treated as a miss, so one broken tier never hides
the tiers behind it.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Dict, List, Optional, Sequence, Set, Tuple

from scripture_engine.core.config import config
from scripture_engine.core.logging import get_logger, tier_context
from scripture_engine.core.models import CorpusStats, Passage, ProviderStatus, Verse
from scripture_engine.core.ports import ScriptureProviderPort
from scripture_engine.utils.books import canonical_sort_key
from scripture_engine.utils.verse_ranges import verse_numbers

from .reference_links import format_reference_link

logger = get_logger(__name__)


def missing_verses(passage: Passage, verses: str | None) -> List[int]:
    """Requested verse numbers absent from ``passage``; empty for a whole chapter."""
    present = {verse.verse for verse in passage.verses}
    return [number for number in verse_numbers(verses) if number not in present]


class TieredResolver:
    """Ordered chain of scripture providers plus a terminal reference link."""

    def __init__(
        self,
        providers: Sequence[ScriptureProviderPort],
        *,
        timeout_seconds: Optional[float] = None,
        link_base_url: Optional[str] = None,
        link_version: Optional[str] = None,
    ) -> None:
        self._providers: Tuple[ScriptureProviderPort, ...] = tuple(providers)
        self.timeout_seconds = (
            config.PROVIDER_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds
        )
        self._link_base_url = link_base_url
        self._link_version = link_version

    @property
    def providers(self) -> Tuple[ScriptureProviderPort, ...]:
        return self._providers

    def provider(self, name: str) -> Optional[ScriptureProviderPort]:
        """Return the tier called ``name``, if configured."""
        return next((p for p in self._providers if p.name == name), None)

    async def _call_tier(
        self, provider: ScriptureProviderPort, call: Awaitable[Any], operation: str
    ) -> Any:
        with tier_context(provider.name):
            try:
                return await asyncio.wait_for(call, timeout=self.timeout_seconds)
            except asyncio.TimeoutError:
                logger.warning(
                    "Tier %s timed out after %.1fs during %s",
                    provider.name,
                    self.timeout_seconds,
                    operation,
                )
            except Exception:  # pylint: disable=broad-except
                logger.warning("Tier %s failed during %s", provider.name, operation, exc_info=True)
        return None

    async def resolve_passage(self, book: str, chapter: int, verses: str) -> Passage | None:
        """Return the first tier's passage for the reference, or None."""
        if not book or not book.strip() or chapter <= 0:
            return None
        for provider in self._providers:
            passage = await self._call_tier(
                provider, provider.get_passage(book, chapter, verses), "get_passage"
            )
            if passage is not None:
                logger.info(
                    "Resolved %s %s:%s from tier %s", passage.book, chapter, verses, provider.name
                )
                return passage
        logger.info("No tier could resolve %s %s:%s", book, chapter, verses)
        return None

    async def resolve_search(self, query: str, limit: int) -> List[Verse]:
        """Return the first non-empty result list across tiers."""
        if not query or not query.strip() or limit <= 0:
            return []
        for provider in self._providers:
            results = await self._call_tier(provider, provider.search(query, limit), "search")
            if results:
                logger.info(
                    "Search %r matched %d verses in tier %s", query, len(results), provider.name
                )
                return list(results)
        return []

    async def load_all(self) -> None:
        """Load every tier concurrently."""
        await asyncio.gather(
            *(self._call_tier(p, p.load(), "load") for p in self._providers)
        )

    async def reload_all(self) -> None:
        """Reload every tier concurrently; each swaps its index when done."""
        await asyncio.gather(
            *(self._call_tier(p, p.reload(), "reload") for p in self._providers)
        )

    def is_loaded(self) -> bool:
        return all(p.is_loaded() for p in self._providers)

    def stats(self) -> CorpusStats:
        """Stats of the highest-priority tier holding data (zeros when none does)."""
        for provider in self._providers:
            if provider.has_data():
                return provider.stats()
        return CorpusStats()

    def books(self) -> Dict[str, List[int]]:
        """Chapters held per book across all tiers, books in canonical order."""
        chapters: Dict[str, Set[int]] = {}
        for provider in self._providers:
            for book in provider.available_books():
                chapters.setdefault(book, set()).update(provider.available_chapters(book))
        return {book: sorted(chapters[book]) for book in sorted(chapters, key=canonical_sort_key)}

    def status(self) -> List[ProviderStatus]:
        return [
            ProviderStatus(
                name=p.name,
                state=p.state,
                loaded=p.is_loaded(),
                has_data=p.has_data(),
                stats=p.stats(),
            )
            for p in self._providers
        ]

    def reference_link(
        self, book: str, chapter: int, verses: str | None = None, version: str | None = None
    ) -> str:
        return format_reference_link(
            book,
            chapter,
            verses,
            version=version or self._link_version,
            base_url=self._link_base_url,
        )


__all__ = ["TieredResolver", "missing_verses"]
