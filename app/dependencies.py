"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.redis_client import CacheManager, get_redis_client
from app.database import get_db
from app.repositories.appointment_repository import AppointmentRepository
from app.services.appointment_service import AppointmentService


def get_cache_manager() -> CacheManager | None:
    """Get the Redis cache manager, or None when caching is disabled."""
    if not settings.cache_enabled:
        return None
    return CacheManager(get_redis_client())


# Type aliases for dependency injection
DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
CacheManagerDep = Annotated[CacheManager | None, Depends(get_cache_manager)]


def get_appointment_service(
    db: DatabaseSession,
    cache_manager: CacheManagerDep,
) -> AppointmentService:
    """Get appointment service bound to the request's database session."""
    return AppointmentService(
        AppointmentRepository(db),
        cache_manager=cache_manager,
        cache_ttl=settings.appointment_cache_ttl,
    )


AppointmentServiceDep = Annotated[AppointmentService, Depends(get_appointment_service)]
