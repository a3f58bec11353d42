"""FastAPI dependencies: operator token guards and access to the resolver."""

import hmac
from typing import Annotated, Awaitable, Callable, Optional

from fastapi import Depends, Header, HTTPException, status

from scripture_engine.core.config import config
from scripture_engine.services import ServiceContainer, runtime
from scripture_engine.services.resolver import TieredResolver

TokenGuard = Callable[..., Awaitable[None]]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _presented_token(authorization: Optional[str], x_admin_token: Optional[str]) -> Optional[str]:
    scheme, _, credentials = (authorization or "").partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return x_admin_token.strip() if x_admin_token else None


def token_guard(enabled_setting: str, token_setting: str) -> TokenGuard:
    """Build a dependency checking the token named by ``token_setting``.

    The guard is a no-op while ``config.<enabled_setting>`` is false. Tokens are
    read from ``config`` on every request so runtime overrides apply.
    """

    async def guard(
        authorization: Annotated[Optional[str], Header(alias="Authorization")] = None,
        x_admin_token: Annotated[Optional[str], Header(alias="X-Admin-Token")] = None,
    ) -> None:
        if not getattr(config, enabled_setting):
            return
        expected = getattr(config, token_setting)
        if not expected:
            raise _unauthorized("Token not configured")
        presented = _presented_token(authorization, x_admin_token)
        if not presented:
            raise _unauthorized("Missing credentials")
        if not hmac.compare_digest(presented, expected):
            raise _unauthorized("Invalid credentials")

    return guard


require_admin_token = token_guard("ENABLE_ADMIN_AUTH", "ADMIN_API_TOKEN")
require_healthcheck_token = token_guard("ENABLE_HEALTHCHECK_AUTH", "HEALTHCHECK_API_TOKEN")


def get_service_container() -> ServiceContainer:
    try:
        return runtime.get_services()
    except RuntimeError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Service container not configured",
        ) from exc


def get_resolver(
    container: Annotated[ServiceContainer, Depends(get_service_container)],
) -> TieredResolver:
    if container.resolver is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Scripture resolver is unavailable",
        )
    return container.resolver


__all__ = [
    "get_resolver",
    "get_service_container",
    "require_admin_token",
    "require_healthcheck_token",
    "token_guard",
]
