"""Health check endpoints."""

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from app.core.redis_client import check_redis_connection
from app.database import check_database_connection

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    version: str
    environment: str
    # Only filled in by the detailed check
    database: str | None = None
    redis: str | None = None


def _state(healthy: bool) -> str:
    return "healthy" if healthy else "unhealthy"


@router.get("/health", response_model=HealthResponse, response_model_exclude_none=True)
async def health_check() -> HealthResponse:
    """Liveness check; touches no dependencies."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get("/health/detailed", response_model=HealthResponse)
async def detailed_health_check() -> HealthResponse:
    """
    Readiness check covering the database and, when caching is on, Redis.

    Redis is reported as "disabled" when caching is off and then does not
    degrade the overall status.
    """
    db_healthy = await check_database_connection()

    redis_healthy = True
    redis_state = "disabled"
    if settings.cache_enabled:
        redis_healthy = await check_redis_connection()
        redis_state = _state(redis_healthy)

    return HealthResponse(
        status="healthy" if db_healthy and redis_healthy else "degraded",
        version=settings.app_version,
        environment=settings.environment,
        database=_state(db_healthy),
        redis=redis_state,
    )


@router.get("/ping")
async def ping() -> dict[str, str]:
    return {"message": "pong"}
