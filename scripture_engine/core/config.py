"""Application configuration loaded via Pydantic settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    SCRIPTURE_LOG_LEVEL: str = Field(default="info")
    SCRIPTURE_LOG_DIR: Path | None = Field(default=None)
    SCRIPTURE_LOG_SCHEMA_VERSION: str = Field(default="1.0.0")

    # Bundled flat files are looked up under DATA_DIR
    DATA_DIR: Path = Field(default=Path("data"))
    # Alternate names for the bundled line-oriented text, tried in order
    FLAT_FILE_NAMES: list[str] = Field(
        default_factory=lambda: [
            "NASB New American Standard Bible (NASB)_djvu.txt",
            "bible-data.txt",
            "nasb.txt",
            "bible.txt",
        ]
    )
    CSV_FILE_NAME: str = Field(default="genesis_bible_verses.csv")

    # Object storage tier (public bucket download)
    BLOB_BASE_URL: str | None = Field(default=None)
    BLOB_BUCKET: str = Field(default="bible")
    BLOB_OBJECT: str = Field(default="asv.json")
    BLOB_API_KEY: str | None = Field(default=None)
    BLOB_FETCH_TIMEOUT_SECONDS: float = Field(default=30.0)

    # Upper bound for a single tier query, including its lazy load
    PROVIDER_TIMEOUT_SECONDS: float = Field(default=10.0)
    TIER_ORDER: list[str] = Field(default_factory=lambda: ["sample", "flat_file", "csv", "blob"])

    SEARCH_DEFAULT_LIMIT: int = Field(default=20)
    SEARCH_MAX_LIMIT: int = Field(default=200)

    REFERENCE_LINK_BASE_URL: str = Field(default="https://www.biblegateway.com/passage/")
    REFERENCE_LINK_VERSION: str = Field(default="NIV")

    ENABLE_ADMIN_AUTH: bool = Field(default=True)
    ENABLE_HEALTHCHECK_AUTH: bool = Field(default=False)
    HEALTHCHECK_API_TOKEN: str | None = Field(default=None)
    ADMIN_API_TOKEN: str | None = Field(default=None)


settings = Settings()
config = settings  # Alias for backward compatibility


__all__ = ["Settings", "settings", "config"]
