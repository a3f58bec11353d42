"""Protocol definitions for scripture providers and raw-text sources."""

# pylint: disable=unnecessary-ellipsis

from __future__ import annotations

from typing import Protocol, runtime_checkable

from scripture_engine.core.models import CorpusStats, Passage, ProviderState, Verse


@runtime_checkable
class ScriptureProviderPort(Protocol):
    """Capability shared by every retrieval tier."""

    name: str

    @property
    def state(self) -> ProviderState:
        """Current load lifecycle state."""
        ...

    async def load(self) -> None:
        """Ingest data once; concurrent callers share one in-flight load."""
        ...

    async def reload(self) -> None:
        """Rebuild the index from scratch and swap it in when complete."""
        ...

    async def get_passage(self, book: str, chapter: int, verses: str) -> Passage | None:
        """Return the requested passage or ``None`` on a miss."""
        ...

    async def search(self, query: str, limit: int) -> list[Verse]:
        """Return up to ``limit`` verses whose text contains ``query``."""
        ...

    def stats(self) -> CorpusStats:
        """Return counts for the resident index without triggering a load."""
        ...

    def is_loaded(self) -> bool:
        """True once the provider reached a terminal state."""
        ...

    def has_data(self) -> bool:
        """True when the resident index holds at least one verse."""
        ...

    def available_books(self) -> list[str]:
        """Books in the resident index, canonical order."""
        ...

    def available_chapters(self, book: str) -> list[int]:
        """Chapters of ``book`` in the resident index, ascending."""
        ...


class TextSourcePort(Protocol):
    """Port supplying raw scripture text/bytes to an ingesting provider."""

    description: str

    async def fetch(self) -> str | bytes | None:
        """Return the raw payload, ``None`` when there is nothing to ingest.

        Transport failures raise :class:`~scripture_engine.core.exceptions.IngestionError`.
        """
        ...


__all__ = ["ScriptureProviderPort", "TextSourcePort"]
