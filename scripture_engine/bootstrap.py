"""Application bootstrap helpers for assembling the service container."""

from __future__ import annotations

from typing import Callable, Dict, List

from scripture_engine.adapters.sources import BlobStorageSource, FileTextSource
from scripture_engine.core.config import Settings, config
from scripture_engine.core.logging import get_logger
from scripture_engine.services import ServiceContainer, build_default_services
from scripture_engine.services.ingestion import PayloadFormat
from scripture_engine.services.providers import (
    BaseIndexedProvider,
    IngestedProvider,
    SampleProvider,
)

logger = get_logger(__name__)


def _sample_tier(_: Settings) -> BaseIndexedProvider:
    return SampleProvider()


def _flat_file_tier(settings: Settings) -> BaseIndexedProvider:
    candidates = [settings.DATA_DIR / name.lstrip("/") for name in settings.FLAT_FILE_NAMES]
    return IngestedProvider("flat_file", FileTextSource(candidates), PayloadFormat.LINES)


def _csv_tier(settings: Settings) -> BaseIndexedProvider:
    source = FileTextSource([settings.DATA_DIR / settings.CSV_FILE_NAME])
    return IngestedProvider("csv", source, PayloadFormat.DELIMITED)


def _blob_tier(settings: Settings) -> BaseIndexedProvider:
    source = BlobStorageSource(
        settings.BLOB_BASE_URL,
        settings.BLOB_BUCKET,
        settings.BLOB_OBJECT,
        api_key=settings.BLOB_API_KEY,
        timeout_seconds=settings.BLOB_FETCH_TIMEOUT_SECONDS,
    )
    return IngestedProvider("blob", source, PayloadFormat.JSON)


TIER_FACTORIES: Dict[str, Callable[[Settings], BaseIndexedProvider]] = {
    "sample": _sample_tier,
    "flat_file": _flat_file_tier,
    "csv": _csv_tier,
    "blob": _blob_tier,
}


def build_default_providers(settings: Settings | None = None) -> List[BaseIndexedProvider]:
    """Instantiate the tiers named in ``TIER_ORDER``; unknown names are skipped."""
    settings = settings or config
    providers: List[BaseIndexedProvider] = []
    for name in settings.TIER_ORDER:
        factory = TIER_FACTORIES.get(name)
        if factory is None:
            logger.warning("Ignoring unknown tier %r in TIER_ORDER", name)
            continue
        providers.append(factory(settings))
    return providers


def build_default_service_container(settings: Settings | None = None) -> ServiceContainer:
    """Return the default service container wired to production sources."""
    settings = settings or config
    return build_default_services(
        providers=build_default_providers(settings),
        timeout_seconds=settings.PROVIDER_TIMEOUT_SECONDS,
    )


__all__ = ["TIER_FACTORIES", "build_default_providers", "build_default_service_container"]
