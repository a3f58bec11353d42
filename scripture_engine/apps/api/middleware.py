"""ASGI middleware binding a correlation id to every HTTP request."""

from __future__ import annotations

import time
import uuid
from typing import Iterable, List, Tuple

from scripture_engine.core.logging import (
    bind_correlation_id,
    get_logger,
    reset_correlation_id,
)

logger = get_logger(__name__)

CORRELATION_HEADERS = ("x-request-id", "x-correlation-id")

RawHeaders = List[Tuple[bytes, bytes]]


def incoming_correlation_id(headers: Iterable[Tuple[bytes, bytes]]) -> str:
    """Reuse the caller's request/correlation id, or mint a fresh one."""
    found = {
        name.decode("latin-1").lower(): value.decode("latin-1")
        for name, value in headers
    }
    for header in CORRELATION_HEADERS:
        if found.get(header):
            return found[header]
    return uuid.uuid4().hex


def with_correlation_headers(headers: RawHeaders, correlation_id: str) -> RawHeaders:
    """Append the correlation headers the response does not already set."""
    present = {name.lower() for name, _ in headers}
    extra = [
        (header.encode("latin-1"), correlation_id.encode("latin-1"))
        for header in CORRELATION_HEADERS
        if header.encode("latin-1") not in present
    ]
    return headers + extra


class CorrelationIdMiddleware:  # pylint: disable=too-few-public-methods
    """Bind a correlation id per request, echo it back and log the outcome."""

    def __init__(self, app) -> None:  # type: ignore[no-untyped-def]
        self.app = app

    async def __call__(self, scope, receive, send):  # type: ignore[no-untyped-def]
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        correlation_id = incoming_correlation_id(scope.get("headers", []))
        token = bind_correlation_id(correlation_id)
        started = time.perf_counter()
        status_code = 500

        async def send_with_headers(message):  # type: ignore[no-untyped-def]
            nonlocal status_code
            if message.get("type") == "http.response.start":
                status_code = message.get("status", status_code)
                message["headers"] = with_correlation_headers(
                    list(message.get("headers", [])), correlation_id
                )
            await send(message)

        try:
            await self.app(scope, receive, send_with_headers)
        finally:
            logger.info(
                "%s %s -> %d",
                scope.get("method", ""),
                scope.get("path", ""),
                status_code,
                extra={
                    "event": "http_request",
                    "status_code": status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
                },
            )
            reset_correlation_id(token)


__all__ = ["CorrelationIdMiddleware", "incoming_correlation_id", "with_correlation_headers"]
