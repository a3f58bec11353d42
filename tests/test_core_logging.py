"""Tests for the logging helpers with correlation ids and tier context."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, cast

from pythonjsonlogger import jsonlogger

from scripture_engine.core.logging import (
    ContextFilter,
    LOG_FILE_PATH,
    bind_correlation_id,
    get_logger,
    reset_correlation_id,
    tier_context,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="hello",
        args=None,
        exc_info=None,
    )


def test_context_filter_attaches_context():
    """Filter should attach the current correlation id and tier onto log records."""
    cid_token = bind_correlation_id("abc123")
    try:
        with tier_context("csv"):
            record = _record()
            assert ContextFilter().filter(record) is True
        record_any = cast(Any, record)
        assert record_any.__dict__["correlation_id"] == "abc123"
        assert record_any.__dict__["tier"] == "csv"
    finally:
        reset_correlation_id(cid_token)


def test_context_filter_defaults_to_dash():
    """Unbound context renders as a placeholder rather than None."""
    record = _record()
    ContextFilter().filter(record)
    assert cast(Any, record).correlation_id == "-"
    assert cast(Any, record).tier == "-"


def test_tier_context_restores_outer_tier():
    """Nested tier contexts restore the enclosing value on exit."""

    def _tier() -> str:
        record = _record()
        ContextFilter().filter(record)
        return cast(Any, record).tier

    with tier_context("sample"):
        with tier_context("blob"):
            assert _tier() == "blob"
        assert _tier() == "sample"
    assert _tier() == "-"


def test_get_logger_has_context_filter():
    """Handlers registered on the root logger include the context filter."""
    logger = get_logger("scripture_engine.tests.logging")
    root_logger = logging.getLogger()
    handlers = [
        handler
        for handler in root_logger.handlers
        if (
            isinstance(handler, RotatingFileHandler)
            and Path(getattr(handler, "baseFilename", "")) == LOG_FILE_PATH
        )
        or (
            isinstance(handler, logging.StreamHandler)
            and getattr(handler, "stream", None) is sys.stdout
        )
    ]
    assert handlers, "expected shared stream/file handlers to be installed"
    assert not logger.handlers, "module logger should rely on shared handlers"
    assert all(
        any(isinstance(flt, ContextFilter) for flt in handler.filters) for handler in handlers
    )
    assert all(isinstance(handler.formatter, jsonlogger.JsonFormatter) for handler in handlers)


def test_get_logger_uses_shared_rotating_handler():
    """Calling get_logger repeatedly should not duplicate file handlers."""
    first = get_logger("scripture_engine.tests.logging.first")
    second = get_logger("scripture_engine.tests.logging.second")

    assert not first.handlers
    assert not second.handlers

    rotating_handlers = [
        handler
        for handler in logging.getLogger().handlers
        if isinstance(handler, RotatingFileHandler)
    ]
    assert len(rotating_handlers) == 1, "expected exactly one shared RotatingFileHandler"
