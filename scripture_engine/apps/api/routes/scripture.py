"""Passage lookup, book listing, search, status and reload routes."""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse

from scripture_engine.adapters.sources import BlobStorageSource
from scripture_engine.apps.api.dependencies import get_resolver, require_admin_token
from scripture_engine.core.api_models import (
    BookChapters,
    BooksResponse,
    PassageNotFound,
    PassageResponse,
    SearchResponse,
    StatusResponse,
)
from scripture_engine.core.config import config
from scripture_engine.core.logging import get_logger
from scripture_engine.services.providers import IngestedProvider
from scripture_engine.services.resolver import TieredResolver, missing_verses
from scripture_engine.utils.verse_ranges import WHOLE_CHAPTER_SENTINEL

logger = get_logger(__name__)

router = APIRouter()

AuthDependency = Annotated[None, Depends(require_admin_token)]
ResolverDependency = Annotated[TieredResolver, Depends(get_resolver)]


def _status_body(resolver: TieredResolver) -> StatusResponse:
    return StatusResponse(
        loaded=resolver.is_loaded(), stats=resolver.stats(), tiers=resolver.status()
    )


@router.get(
    "/passages/{book}/{chapter}",
    response_model=PassageResponse,
    responses={404: {"model": PassageNotFound}},
)
async def get_passage(
    book: str,
    chapter: int,
    resolver: ResolverDependency,
    verses: str = Query(WHOLE_CHAPTER_SENTINEL, description="e.g. 16, 1-3, 1-3,5-7 or *"),
    version: Optional[str] = Query(None, description="Translation code for the reference link"),
) -> PassageResponse | JSONResponse:
    """Resolve a passage through the tiers; 404 carries a link to read it elsewhere."""
    link = resolver.reference_link(book, chapter, verses, version)
    passage = await resolver.resolve_passage(book, chapter, verses)
    if passage is None:
        body = PassageNotFound(
            detail=f"{book} {chapter}:{verses} is not available in the loaded data.",
            reference_link=link,
        )
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=body.model_dump())
    return PassageResponse(
        book=passage.book,
        chapter=passage.chapter,
        requested_range=passage.requested_range,
        source=passage.source,
        text=passage.text,
        verses=passage.verses,
        missing_verses=missing_verses(passage, verses),
        reference_link=resolver.reference_link(
            passage.book, passage.chapter, passage.requested_range, version
        ),
    )


@router.get("/books", response_model=BooksResponse)
async def list_books(resolver: ResolverDependency) -> BooksResponse:
    """Books and chapters held by any tier, loading tiers that are not yet loaded."""
    await resolver.load_all()
    return BooksResponse(
        books=[
            BookChapters(book=book, chapters=chapters)
            for book, chapters in resolver.books().items()
        ]
    )


@router.get("/search", response_model=SearchResponse)
async def search(
    resolver: ResolverDependency,
    q: str = Query(..., min_length=1, description="Case-insensitive text to find"),
    limit: Optional[int] = Query(None, ge=1),
) -> SearchResponse:
    """Free-text search across the first tier with matches."""
    effective = min(limit or config.SEARCH_DEFAULT_LIMIT, config.SEARCH_MAX_LIMIT)
    results = await resolver.resolve_search(q, effective)
    return SearchResponse(query=q, limit=effective, results=results)


@router.get("/status", response_model=StatusResponse)
async def get_status(resolver: ResolverDependency) -> StatusResponse:
    """Per-tier load state and the stats of the primary tier with data."""
    return _status_body(resolver)


@router.post("/reload", response_model=StatusResponse)
async def reload_tiers(
    _: AuthDependency,
    resolver: ResolverDependency,
    bucket: Optional[str] = Query(None, description="Switch the blob tier to this bucket"),
    object_name: Optional[str] = Query(None, alias="object", description="Blob object name"),
) -> StatusResponse:
    """Rebuild every tier's index, optionally pointing the blob tier elsewhere first."""
    if bucket or object_name:
        provider = resolver.provider("blob")
        if not isinstance(provider, IngestedProvider) or not isinstance(
            provider.source, BlobStorageSource
        ):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Blob tier is not configured",
            )
        provider.source.configure(bucket=bucket, object_name=object_name)
    logger.info("Reloading all tiers")
    await resolver.reload_all()
    return _status_body(resolver)


__all__ = ["router"]
