"""Raw-text sources feeding :class:`~scripture_engine.services.providers.IngestedProvider`.

Each source implements :class:`~scripture_engine.core.ports.TextSourcePort`:
``fetch()`` returns the payload, ``None`` when there is nothing to ingest, and
raises :class:`IngestionError` when the transport itself fails.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Dict, Optional, Sequence

import httpx

from scripture_engine.core.exceptions import IngestionError
from scripture_engine.core.logging import get_logger

logger = get_logger(__name__)


class StaticTextSource:
    """In-memory payload, e.g. text handed over by an upload form or a test."""

    def __init__(
        self, payload: str | bytes | None = None, description: str = "static text"
    ) -> None:
        self.payload = payload
        self.description = description

    def set_payload(self, payload: str | bytes | None) -> None:
        """Replace the payload; the owning provider picks it up on reload."""
        self.payload = payload

    async def fetch(self) -> str | bytes | None:
        return self.payload


class FileTextSource:
    """First existing file among ``candidates``, read off the event loop."""

    def __init__(self, candidates: Sequence[Path | str]) -> None:
        self.candidates = [Path(c) for c in candidates]
        self.description = ", ".join(str(c) for c in self.candidates) or "no files"

    def resolve_path(self) -> Optional[Path]:
        return next((path for path in self.candidates if path.is_file()), None)

    async def fetch(self) -> bytes | None:
        path = self.resolve_path()
        if path is None:
            logger.info("No data file found among: %s", self.description)
            return None
        try:
            payload = await asyncio.to_thread(path.read_bytes)
        except OSError as exc:
            raise IngestionError(f"Could not read {path}: {exc}") from exc
        logger.info("Read %d bytes from %s", len(payload), path)
        return payload


class BlobStorageSource:
    """Public object-storage download (``/storage/v1/object/public/{bucket}/{object}``).

    Without a base URL the source is considered unconfigured and yields nothing.
    A missing object (404) also yields nothing; any other HTTP or network failure
    raises :class:`IngestionError`.
    """

    def __init__(
        self,
        base_url: Optional[str],
        bucket: str,
        object_name: str,
        *,
        api_key: Optional[str] = None,
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.bucket = bucket
        self.object_name = object_name
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def description(self) -> str:
        return f"blob {self.bucket}/{self.object_name}"

    @property
    def url(self) -> Optional[str]:
        if not self.base_url:
            return None
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{self.object_name}"

    def configure(self, bucket: Optional[str] = None, object_name: Optional[str] = None) -> None:
        """Point the source at another bucket/object; callers reload the provider."""
        if bucket:
            self.bucket = bucket
        if object_name:
            self.object_name = object_name
        logger.info("Blob source configured for %s", self.description)

    def _headers(self) -> Dict[str, str]:
        if not self.api_key:
            return {}
        return {"apikey": self.api_key, "Authorization": f"Bearer {self.api_key}"}

    async def fetch(self) -> bytes | None:
        url = self.url
        if url is None:
            logger.info("Blob storage not configured; skipping %s", self.description)
            return None
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport
            ) as client:
                response = await client.get(url, headers=self._headers())
        except httpx.HTTPError as exc:
            raise IngestionError(f"Failed to download {url}: {exc}") from exc

        if response.status_code == 404:
            logger.warning("Blob %s not found", self.description)
            return None
        if response.status_code >= 400:
            raise IngestionError(
                f"Failed to download {url}: HTTP {response.status_code} {response.text[:200]}"
            )
        logger.info("Downloaded %d bytes from %s", len(response.content), self.description)
        return response.content


__all__ = ["BlobStorageSource", "FileTextSource", "StaticTextSource"]
