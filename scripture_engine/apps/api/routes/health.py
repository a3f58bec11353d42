"""Health and readiness routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..dependencies import require_healthcheck_token

router = APIRouter()


@router.get("/")
def read_root() -> dict[str, str]:
    """Info endpoint with a short usage message."""
    return {
        "message": "Scripture engine. Try /passages/John/3?verses=16 or /search?q=shepherd; "
        "see /docs for all endpoints."
    }


@router.get("/alive")
async def alive_check(_: None = Depends(require_healthcheck_token)) -> JSONResponse:
    """Liveness check for load balancers and orchestrators."""
    return JSONResponse({"status": "ok", "message": "Scripture engine is alive and healthy."})


__all__ = ["router"]
