"""Tests for default tier wiring."""
# pylint: disable=missing-function-docstring

import asyncio
from pathlib import Path

from scripture_engine.adapters.sources import BlobStorageSource, FileTextSource
from scripture_engine.bootstrap import build_default_providers, build_default_service_container
from scripture_engine.core.config import Settings
from scripture_engine.services.providers import IngestedProvider, SampleProvider


def _settings(tmp_path: Path, **overrides) -> Settings:
    return Settings(DATA_DIR=tmp_path, BLOB_BASE_URL=None, **overrides)


def test_default_order_and_types(tmp_path: Path):
    providers = build_default_providers(_settings(tmp_path))
    assert [p.name for p in providers] == ["sample", "flat_file", "csv", "blob"]
    assert isinstance(providers[0], SampleProvider)
    flat_file = providers[1]
    assert isinstance(flat_file, IngestedProvider)
    assert isinstance(flat_file.source, FileTextSource)
    assert flat_file.source.candidates[1] == tmp_path / "bible-data.txt"
    assert isinstance(providers[3].source, BlobStorageSource)


def test_tier_order_is_configurable_and_unknown_names_skipped(tmp_path: Path):
    settings = _settings(tmp_path, TIER_ORDER=["csv", "nonsense", "sample"])
    assert [p.name for p in build_default_providers(settings)] == ["csv", "sample"]


def test_bundled_files_are_ingested(tmp_path: Path):
    (tmp_path / "nasb.txt").write_text(
        "Genesis 1:1 In the beginning God created the heavens and the earth.\n"
        "Genesis 1:2 The earth was formless and void,\n",
        encoding="utf-8",
    )
    (tmp_path / "verses.csv").write_text(
        "book,chapter,verse,text\nExodus,20,3,\"You shall have no other gods before Me.\"\n",
        encoding="utf-8",
    )
    settings = _settings(
        tmp_path, TIER_ORDER=["flat_file", "csv"], CSV_FILE_NAME="verses.csv"
    )
    container = build_default_service_container(settings)
    resolver = container.resolver

    async def _exercise():
        return (
            await resolver.resolve_passage("Gen", 1, "1-2"),
            await resolver.resolve_passage("Exod", 20, "3"),
        )

    genesis, exodus = asyncio.run(_exercise())
    assert genesis is not None and genesis.source == "flat_file"
    assert len(genesis.verses) == 2
    assert exodus is not None and exodus.source == "csv"
    assert resolver.timeout_seconds == settings.PROVIDER_TIMEOUT_SECONDS
