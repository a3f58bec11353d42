"""Pytest configuration: ensure env vars and import path are set early.

This runs before any tests, so modules can import without local path hacks.
Load .env before setting defaults so local overrides are honored.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Ensure repository root is on sys.path for local package imports
sys.path.append(str(Path(__file__).resolve().parents[1]))

load_dotenv(override=False)

# Keep the default tiers offline during tests
os.environ.setdefault("BLOB_BASE_URL", "")
os.environ.setdefault("PROVIDER_TIMEOUT_SECONDS", "5")

from scripture_engine.services import runtime  # noqa: E402  pylint: disable=wrong-import-position


@pytest.fixture(autouse=True)
def _clear_service_registry():
    """Each test starts and ends without a registered service container."""
    runtime.clear_services()
    yield
    runtime.clear_services()
