"""Application service layer: providers, resolver and the service container."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

from scripture_engine.core.ports import ScriptureProviderPort

if TYPE_CHECKING:  # pragma: no cover - type narrowing only
    from .resolver import TieredResolver


@dataclass(slots=True)
class ServiceContainer:
    """Aggregate of application-level services available to handlers."""

    resolver: Optional["TieredResolver"] = None


def build_default_services(
    *,
    providers: Optional[Sequence[ScriptureProviderPort]] = None,
    timeout_seconds: Optional[float] = None,
) -> ServiceContainer:
    """Return a service container whose resolver queries ``providers`` in order.

    Without explicit providers only the bundled sample tier is wired.
    """

    # pylint: disable=import-outside-toplevel
    from .providers import SampleProvider
    from .resolver import TieredResolver

    tiers = list(providers) if providers is not None else [SampleProvider()]
    return ServiceContainer(resolver=TieredResolver(tiers, timeout_seconds=timeout_seconds))


__all__ = ["ServiceContainer", "build_default_services"]
