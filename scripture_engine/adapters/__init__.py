"""Infrastructure adapter exports."""

from scripture_engine.core.exceptions import IngestionError  # noqa: F401

from .sources import BlobStorageSource, FileTextSource, StaticTextSource

__all__ = [
    "BlobStorageSource",
    "FileTextSource",
    "StaticTextSource",
    "IngestionError",
]
