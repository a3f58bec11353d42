"""Process-wide registry for the active :class:`ServiceContainer`.

The FastAPI app and the CLI register a container at startup; route handlers
and commands look the resolver up here. Tests swap in containers built from
in-memory providers and clear the registry afterwards.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from . import ServiceContainer

if TYPE_CHECKING:  # pragma: no cover - type narrowing only
    from .resolver import TieredResolver

_registry: dict[str, Optional[ServiceContainer]] = {"services": None}


def set_services(container: ServiceContainer) -> None:
    _registry["services"] = container


def get_services() -> ServiceContainer:
    """Return the registered container; raises RuntimeError before registration."""
    container = _registry["services"]
    if container is None:
        raise RuntimeError("Service container has not been configured.")
    return container


def get_resolver() -> "TieredResolver":
    """Return the registered container's resolver."""
    resolver = get_services().resolver
    if resolver is None:
        raise RuntimeError("Service container has no resolver configured.")
    return resolver


def clear_services() -> None:
    _registry["services"] = None


__all__ = ["clear_services", "get_resolver", "get_services", "set_services"]
