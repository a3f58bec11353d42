"""Unit tests for API dependency helpers."""
# pylint: disable=missing-function-docstring

import asyncio

import pytest
from fastapi import HTTPException

from scripture_engine.apps.api import dependencies
from scripture_engine.core.config import config as app_config
from scripture_engine.services import ServiceContainer, build_default_services, runtime


def test_require_admin_token_disabled(monkeypatch):
    monkeypatch.setattr(app_config, "ENABLE_ADMIN_AUTH", False, raising=True)
    asyncio.run(dependencies.require_admin_token())


def test_require_admin_token_valid(monkeypatch):
    monkeypatch.setattr(app_config, "ENABLE_ADMIN_AUTH", True, raising=True)
    monkeypatch.setattr(app_config, "ADMIN_API_TOKEN", "secret", raising=True)
    asyncio.run(dependencies.require_admin_token(authorization="Bearer secret"))
    asyncio.run(dependencies.require_admin_token(x_admin_token="secret"))


@pytest.mark.parametrize(
    "token, authorization",
    [("secret", "Bearer nope"), ("secret", None), (None, "Bearer secret")],
)
def test_require_admin_token_rejects(monkeypatch, token, authorization):
    monkeypatch.setattr(app_config, "ENABLE_ADMIN_AUTH", True, raising=True)
    monkeypatch.setattr(app_config, "ADMIN_API_TOKEN", token, raising=True)
    with pytest.raises(HTTPException) as excinfo:
        asyncio.run(dependencies.require_admin_token(authorization=authorization))
    assert excinfo.value.status_code == 401


def test_require_healthcheck_token(monkeypatch):
    monkeypatch.setattr(app_config, "ENABLE_HEALTHCHECK_AUTH", False, raising=True)
    asyncio.run(dependencies.require_healthcheck_token())

    monkeypatch.setattr(app_config, "ENABLE_HEALTHCHECK_AUTH", True, raising=True)
    monkeypatch.setattr(app_config, "HEALTHCHECK_API_TOKEN", "health", raising=True)
    asyncio.run(dependencies.require_healthcheck_token(x_admin_token="health"))
    with pytest.raises(HTTPException):
        asyncio.run(dependencies.require_healthcheck_token(x_admin_token="wrong"))


def test_get_service_container_unconfigured():
    with pytest.raises(HTTPException) as excinfo:
        dependencies.get_service_container()
    assert excinfo.value.status_code == 500


def test_get_resolver():
    container = build_default_services()
    runtime.set_services(container)
    assert dependencies.get_resolver(dependencies.get_service_container()) is container.resolver
    with pytest.raises(HTTPException):
        dependencies.get_resolver(ServiceContainer())
