"""Tests for raw-text sources."""
# pylint: disable=missing-function-docstring

import asyncio
from pathlib import Path

import httpx
import pytest

from scripture_engine.adapters.sources import BlobStorageSource, FileTextSource, StaticTextSource
from scripture_engine.core.exceptions import IngestionError


def test_static_source_returns_payload():
    source = StaticTextSource("Genesis 1:1 In the beginning")
    assert asyncio.run(source.fetch()) == "Genesis 1:1 In the beginning"
    source.set_payload(None)
    assert asyncio.run(source.fetch()) is None


def test_file_source_uses_first_existing_candidate(tmp_path: Path):
    second = tmp_path / "bible.txt"
    second.write_text("John 3:16 For God so loved the world", encoding="utf-8")
    source = FileTextSource([tmp_path / "nasb.txt", second])
    assert source.resolve_path() == second
    assert asyncio.run(source.fetch()) == second.read_bytes()


def test_file_source_without_files_returns_none(tmp_path: Path):
    assert asyncio.run(FileTextSource([tmp_path / "missing.txt"]).fetch()) is None


def test_file_source_read_error_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    path = tmp_path / "bible.txt"
    path.write_text("x", encoding="utf-8")

    def _boom(self):  # type: ignore[no-untyped-def]
        raise PermissionError("denied")

    monkeypatch.setattr(Path, "read_bytes", _boom)
    with pytest.raises(IngestionError):
        asyncio.run(FileTextSource([path]).fetch())


def _blob(handler, **kwargs) -> BlobStorageSource:
    return BlobStorageSource(
        "https://storage.example.test/",
        "bible",
        "asv.json",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def test_blob_source_downloads_public_object():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["apikey"] = request.headers.get("apikey")
        return httpx.Response(200, content=b'{"books": {}}')

    source = _blob(handler, api_key="anon-key")
    assert asyncio.run(source.fetch()) == b'{"books": {}}'
    assert seen["url"] == (
        "https://storage.example.test/storage/v1/object/public/bible/asv.json"
    )
    assert seen["apikey"] == "anon-key"


def test_blob_source_missing_object_returns_none():
    source = _blob(lambda request: httpx.Response(404, text="not found"))
    assert asyncio.run(source.fetch()) is None


def test_blob_source_server_error_raises():
    source = _blob(lambda request: httpx.Response(500, text="oops"))
    with pytest.raises(IngestionError):
        asyncio.run(source.fetch())


def test_blob_source_transport_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(IngestionError):
        asyncio.run(_blob(handler).fetch())


def test_blob_source_unconfigured_returns_none():
    source = BlobStorageSource(None, "bible", "asv.json")
    assert source.url is None
    assert asyncio.run(source.fetch()) is None


def test_blob_source_configure_switches_target():
    source = _blob(lambda request: httpx.Response(200, content=b"{}"))
    source.configure(bucket="scripture", object_name="kjv.json")
    assert source.url.endswith("/public/scripture/kjv.json")
    source.configure(object_name="web.json")
    assert source.description == "blob scripture/web.json"
