"""Core data transfer objects shared across layers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Verse(BaseModel):
    """A single verse record."""

    model_config = ConfigDict(frozen=True)

    book: str = Field(min_length=1)
    chapter: int = Field(gt=0)
    verse: int = Field(gt=0)
    text: str = Field(min_length=1)

    @property
    def reference(self) -> str:
        """Human-readable reference such as ``"John 3:16"``."""
        return f"{self.book} {self.chapter}:{self.verse}"


class Passage(BaseModel):
    """A resolved set of verses for one book/chapter/range request."""

    model_config = ConfigDict(frozen=True)

    book: str
    chapter: int
    requested_range: str
    verses: List[Verse]
    source: Optional[str] = None

    @property
    def text(self) -> str:
        """Verse texts joined with single spaces."""
        return " ".join(v.text for v in self.verses)


@dataclass(slots=True, frozen=True)
class ReferenceRange:
    """Parsed verse-range string: explicit verse numbers or a whole chapter."""

    verses: Tuple[int, ...] = ()
    whole_chapter: bool = False

    def is_empty(self) -> bool:
        """True when nothing can match (no verses and not a whole chapter)."""
        return not self.whole_chapter and not self.verses

    def contains(self, verse: int) -> bool:
        """Whether ``verse`` falls inside this range."""
        return self.whole_chapter or verse in self.verses


class CorpusStats(BaseModel):
    """Read-only snapshot of what a provider currently holds."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_verses: int = Field(default=0, alias="totalVerses")
    total_books: int = Field(default=0, alias="totalBooks")
    total_chapters: int = Field(default=0, alias="totalChapters")


class ProviderState(str, Enum):
    """Load lifecycle of a provider."""

    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    LOADED_EMPTY = "loaded_empty"

    @property
    def is_terminal(self) -> bool:
        """Loaded and loaded-empty are both final and queryable."""
        return self in (ProviderState.LOADED, ProviderState.LOADED_EMPTY)


class ProviderStatus(BaseModel):
    """Status line for one tier, as reported by the resolver."""

    name: str
    state: ProviderState
    loaded: bool
    has_data: bool
    stats: CorpusStats


__all__ = [
    "Verse",
    "Passage",
    "ReferenceRange",
    "CorpusStats",
    "ProviderState",
    "ProviderStatus",
]
