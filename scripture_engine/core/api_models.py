"""API response models for the HTTP surface."""

from __future__ import annotations

from pydantic import BaseModel, Field

from scripture_engine.core.models import CorpusStats, ProviderStatus, Verse


class PassageResponse(BaseModel):
    """Response model for GET /passages/{book}/{chapter}."""

    book: str = Field(..., description="Canonical book name used by the answering tier")
    chapter: int
    requested_range: str = Field(..., description="Canonical verse range, '*' for whole chapter")
    source: str | None = Field(default=None, description="Tier that produced the passage")
    text: str = Field(..., description="Verse texts joined with spaces")
    verses: list[Verse]
    missing_verses: list[int] = Field(
        default_factory=list, description="Requested verses the answering tier does not hold"
    )
    reference_link: str = Field(..., description="Link to read the passage in context")


class PassageNotFound(BaseModel):
    """404 body for a reference no tier could resolve."""

    detail: str
    reference_link: str


class SearchResponse(BaseModel):
    """Response model for GET /search."""

    query: str
    limit: int
    results: list[Verse]


class BookChapters(BaseModel):
    """Chapters available for one book."""

    book: str
    chapters: list[int]


class BooksResponse(BaseModel):
    """Response model for GET /books."""

    books: list[BookChapters]


class StatusResponse(BaseModel):
    """Response model for GET /status and POST /reload."""

    loaded: bool = Field(..., description="True once every tier reached a terminal state")
    stats: CorpusStats
    tiers: list[ProviderStatus]


__all__ = [
    "BookChapters",
    "BooksResponse",
    "PassageNotFound",
    "PassageResponse",
    "SearchResponse",
    "StatusResponse",
]
