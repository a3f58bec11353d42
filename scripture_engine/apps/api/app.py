"""FastAPI application factory and lifespan."""

from __future__ import annotations

import asyncio
import contextlib
from contextlib import asynccontextmanager

from fastapi import FastAPI

from scripture_engine.apps.api.middleware import CorrelationIdMiddleware
from scripture_engine.core.logging import get_logger
from scripture_engine.services import ServiceContainer
from scripture_engine.services import runtime

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Register services and warm every tier in the background."""
    logger.info("Initializing scripture engine...")
    services = getattr(app.state, "services", None)
    if isinstance(services, ServiceContainer):
        runtime.set_services(services)
    warmup: asyncio.Task[None] | None = None
    if isinstance(services, ServiceContainer) and services.resolver is not None:
        # Requests arriving before warmup finishes trigger (and share) the same loads.
        warmup = asyncio.create_task(services.resolver.load_all())
    app.state.warmup_task = warmup
    try:
        yield
    finally:
        if warmup is not None and not warmup.done():
            warmup.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await warmup
        logger.info("Scripture engine shut down.")


def create_app(services: ServiceContainer | None = None) -> FastAPI:
    """Build the FastAPI application with configured routers."""
    if services is None:
        raise RuntimeError("Service container must be provided when creating the app.")
    app = FastAPI(title="Scripture Engine", lifespan=lifespan)
    app.state.services = services
    runtime.set_services(services)
    app.add_middleware(CorrelationIdMiddleware)

    # Import lazily to avoid potential circular imports when routers grow.
    from .routes import health, scripture  # pylint: disable=import-outside-toplevel

    app.include_router(health.router)
    app.include_router(scripture.router)
    return app


__all__ = ["create_app", "lifespan"]
