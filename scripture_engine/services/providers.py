"""Scripture providers: one passage index each, loaded lazily and at most once.

Lifecycle: ``UNLOADED -> LOADING -> LOADED | LOADED_EMPTY``. Concurrent
``load()`` callers share a single in-flight task. ``reload()`` rebuilds the
index privately and publishes it with one reference assignment, so queries made
during a reload keep answering from the previous index. A failed ingestion
publishes an empty index.
"""

from __future__ import annotations

import asyncio
import time
from typing import List, Optional, Sequence

from scripture_engine.core.logging import get_logger, tier_context
from scripture_engine.core.models import CorpusStats, Passage, ProviderState, Verse
from scripture_engine.core.ports import TextSourcePort
from scripture_engine.utils.books import normalize_book_name
from scripture_engine.utils.verse_ranges import format_range, parse_range

from .ingestion import PayloadFormat, parse_payload
from .passage_index import EMPTY_INDEX, PassageIndex
from .sample_data import SAMPLE_VERSES
from .search import search_index
from .stats import compute_stats

logger = get_logger(__name__)


class BaseIndexedProvider:
    """Shared lifecycle and query logic; subclasses only supply ``_ingest``."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._index: PassageIndex = EMPTY_INDEX
        self._stats: CorpusStats = CorpusStats()
        self._state = ProviderState.UNLOADED
        self._published = False
        self._inflight: Optional[asyncio.Future[None]] = None

    async def _ingest(self) -> Sequence[Verse]:
        raise NotImplementedError

    @property
    def state(self) -> ProviderState:
        return self._state

    async def load(self) -> None:
        """Ingest once; later calls return immediately."""
        if self._state.is_terminal:
            return
        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.ensure_future(self._run_load())
        # Shielded so a cancelled waiter does not cancel the shared load.
        await asyncio.shield(self._inflight)

    async def reload(self) -> None:
        """Re-ingest from scratch; concurrent reloads join the same task."""
        current = self._inflight
        if current is not None and not current.done():
            await asyncio.shield(current)
        if self._inflight is None or self._inflight is current or self._inflight.done():
            self._inflight = asyncio.ensure_future(self._run_load())
        await asyncio.shield(self._inflight)

    async def _run_load(self) -> None:
        with tier_context(self.name):
            self._state = ProviderState.LOADING
            started = time.perf_counter()
            try:
                index = PassageIndex.build(await self._ingest())
            except Exception:  # pylint: disable=broad-except
                logger.exception("Provider %s failed to ingest data", self.name)
                index = EMPTY_INDEX
            self._publish(index)
            logger.info(
                "Provider %s settled as %s with %d verses in %.1f ms",
                self.name,
                self._state.value,
                self._stats.total_verses,
                (time.perf_counter() - started) * 1000.0,
            )

    def _publish(self, index: PassageIndex) -> None:
        self._stats = compute_stats(index)
        self._index = index
        self._published = True
        self._state = ProviderState.LOADED_EMPTY if index.is_empty() else ProviderState.LOADED

    async def _ensure_loaded(self) -> PassageIndex:
        if not self._published:
            await self.load()
        return self._index

    async def get_passage(self, book: str, chapter: int, verses: str) -> Passage | None:
        """Return the verses of ``book chapter:verses`` held by this provider."""
        index = await self._ensure_loaded()
        if chapter <= 0 or not book or not book.strip():
            return None
        reference = parse_range(verses)
        if reference.is_empty():
            return None
        name = normalize_book_name(book, index.books())
        selected = [v for v in index.chapter(name, chapter) if reference.contains(v.verse)]
        if not selected:
            return None
        return Passage(
            book=name,
            chapter=chapter,
            requested_range=format_range(reference),
            verses=selected,
            source=self.name,
        )

    async def search(self, query: str, limit: int) -> List[Verse]:
        index = await self._ensure_loaded()
        return search_index(index, query, limit)

    def stats(self) -> CorpusStats:
        return self._stats

    def is_loaded(self) -> bool:
        return self._state.is_terminal

    def has_data(self) -> bool:
        return not self._index.is_empty()

    def available_books(self) -> List[str]:
        return list(self._index.books())

    def available_chapters(self, book: str) -> List[int]:
        return self._index.chapters(book)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, state={self._state.value!r})"


class SampleProvider(BaseIndexedProvider):
    """Serves the curated verses bundled with the engine."""

    def __init__(self, verses: Sequence[Verse] = SAMPLE_VERSES, name: str = "sample") -> None:
        super().__init__(name)
        self._verses = tuple(verses)

    async def _ingest(self) -> Sequence[Verse]:
        return self._verses


class IngestedProvider(BaseIndexedProvider):
    """Parses the payload of a :class:`TextSourcePort` into an index.

    A source returning ``None`` settles the provider as loaded-empty; a source
    or parser error is logged and does the same.
    """

    def __init__(
        self,
        name: str,
        source: TextSourcePort,
        payload_format: PayloadFormat | str | None = None,
    ) -> None:
        super().__init__(name)
        self.source = source
        self.payload_format = payload_format

    async def _ingest(self) -> Sequence[Verse]:
        payload = await self.source.fetch()
        if payload is None:
            logger.info(
                "Provider %s: nothing to ingest from %s", self.name, self.source.description
            )
            return []
        # Large payloads are parsed off the event loop.
        return await asyncio.to_thread(parse_payload, payload, self.payload_format)


__all__ = ["BaseIndexedProvider", "IngestedProvider", "SampleProvider"]
