"""JSON logging shared by every module.

Each record carries the request correlation id (bound by the HTTP middleware)
and the provider tier being queried or loaded (bound by :func:`tier_context`).
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar, Token
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator, Optional

from pythonjsonlogger import jsonlogger

from scripture_engine.core.config import settings

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
_tier: ContextVar[Optional[str]] = ContextVar("tier", default=None)

LOG_LEVEL = getattr(logging, str(settings.SCRIPTURE_LOG_LEVEL).upper(), logging.INFO)

BASE_DIR = Path(__file__).resolve().parent.parent
ROOT_DIR = BASE_DIR.parent

_FIELDS = ("asctime", "levelname", "name", "message", "correlation_id", "tier")
_RENAMED = {
    "asctime": "timestamp",
    "levelname": "level",
    "name": "logger",
    "correlation_id": "cid",
}


def _resolve_logs_dir() -> Path:
    """First creatable directory of: SCRIPTURE_LOG_DIR, <root>/logs, DATA_DIR/logs, <pkg>/logs."""
    candidates = [ROOT_DIR / "logs", Path(settings.DATA_DIR) / "logs", BASE_DIR / "logs"]
    if settings.SCRIPTURE_LOG_DIR:
        candidates.insert(0, Path(settings.SCRIPTURE_LOG_DIR))
    for candidate in candidates:
        try:
            candidate.mkdir(parents=True, exist_ok=True)
        except OSError:
            continue
        return candidate
    raise PermissionError("Unable to create a writable logs directory")


LOG_FILE_PATH = _resolve_logs_dir() / "scripture_engine.log"


class VersionedJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping ``schema_version`` on every entry."""

    def __init__(self, *args, schema_version: str, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._schema_version = schema_version

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.setdefault("schema_version", self._schema_version)


class ContextFilter(logging.Filter):  # pylint: disable=too-few-public-methods
    """Copy the bound correlation id and tier onto each record ("-" when unbound)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = _correlation_id.get() or "-"
        record.tier = _tier.get() or "-"
        return True


def bind_correlation_id(value: Optional[str]) -> Token[Optional[str]]:
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[Optional[str]]) -> None:
    _correlation_id.reset(token)


@contextmanager
def tier_context(name: Optional[str]) -> Iterator[None]:
    """Tag log records emitted inside the block with provider tier ``name``."""
    token = _tier.set(name)
    try:
        yield
    finally:
        _tier.reset(token)


def _ensure_root_handlers() -> None:
    root = logging.getLogger()
    if getattr(root, "_scripture_handlers_installed", False):
        return

    formatter = VersionedJsonFormatter(
        " ".join(f"%({field})s" for field in _FIELDS),
        rename_fields=_RENAMED,
        datefmt="%Y-%m-%d %H:%M:%S",
        json_ensure_ascii=False,
        schema_version=settings.SCRIPTURE_LOG_SCHEMA_VERSION,
    )
    context_filter = ContextFilter()
    handlers = (
        logging.StreamHandler(sys.stdout),
        RotatingFileHandler(
            LOG_FILE_PATH, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
        ),
    )
    for handler in handlers:
        handler.addFilter(context_filter)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    setattr(root, "_scripture_handlers_installed", True)


def get_logger(name: str) -> logging.Logger:
    """Module logger propagating to the shared JSON handlers on the root logger."""
    _ensure_root_handlers()
    logger = logging.getLogger(name)
    logger.setLevel(LOG_LEVEL)
    return logger


__all__ = [
    "ContextFilter",
    "LOG_FILE_PATH",
    "VersionedJsonFormatter",
    "bind_correlation_id",
    "get_logger",
    "reset_correlation_id",
    "tier_context",
]
