"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.inventory.api.http.deps import get_database_service
from src.inventory.core.services import DbSessionService
from src.inventory.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe; returns 200 while the process runs and never touches the store."""
    return {"status": "ok"}


@router.get("/ready", response_model=None)
def readiness(
    database_service: DbSessionService = Depends(get_database_service),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 200 when the database answers, 503 otherwise."""
    config = get_config()
    healthy = database_service.health_check()

    response = {
        "status": "ready" if healthy else "not_ready",
        "environment": config.app.environment,
        "checks": {
            "database": {
                "status": "healthy" if healthy else "unhealthy",
                "type": database_service.engine.dialect.name,
                "pool": database_service.get_pool_status(),
            }
        },
    }

    if not healthy:
        return JSONResponse(status_code=503, content=response)

    return response
