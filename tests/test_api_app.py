"""Tests for FastAPI app factory and lifespan."""
# pylint: disable=missing-function-docstring

import asyncio

import pytest

from scripture_engine.api_factory import create_app as create_default_app
from scripture_engine.apps.api.app import create_app, lifespan
from scripture_engine.services import build_default_services, runtime


def test_create_app_requires_services():
    with pytest.raises(RuntimeError):
        create_app()


def test_create_app_has_routes():
    app = create_app(build_default_services())
    assert app.url_path_for("read_root") == "/"
    assert app.url_path_for("alive_check") == "/alive"
    assert app.url_path_for("get_passage", book="John", chapter="3") == "/passages/John/3"
    assert app.url_path_for("list_books") == "/books"
    assert app.url_path_for("search") == "/search"
    assert app.url_path_for("get_status") == "/status"
    assert app.url_path_for("reload_tiers") == "/reload"
    assert app.state.services.resolver is not None
    assert runtime.get_services() is app.state.services


def test_default_factory_wires_configured_tiers():
    app = create_default_app()
    names = [p.name for p in app.state.services.resolver.providers]
    assert names == ["sample", "flat_file", "csv", "blob"]


def test_lifespan_warms_tiers():
    services = build_default_services()
    app = create_app(services)

    async def _exercise() -> None:
        async with lifespan(app):
            await app.state.warmup_task
            assert services.resolver.is_loaded()

    asyncio.run(_exercise())
