"""Health check service."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from error_registry.core.dependencies.database import get_db_session
from error_registry.core.services.base import BaseService
from error_registry.core.settings import get_app_settings
from error_registry.features.health.schemas import HealthStatus


class HealthService(BaseService):
    """Liveness and readiness checks."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__()
        self._session = session

    def liveness(self) -> dict[str, Any]:
        """Report that the process is up."""
        settings = get_app_settings()
        return {
            "status": HealthStatus.HEALTHY,
            "timestamp": datetime.now(UTC),
            "service": settings.service_name,
            "version": settings.version,
        }

    async def readiness(self) -> dict[str, Any]:
        """Check that the database answers a trivial query."""
        database_ok = await self._check_database()
        return {
            "ready": database_ok,
            "checks": {"database": database_ok},
            "timestamp": datetime.now(UTC),
        }

    async def _check_database(self) -> bool:
        try:
            await self._session.execute(text("SELECT 1"))
        except SQLAlchemyError:
            self.logger.warning("Database health check failed", exc_info=True)
            return False
        self._lazy.debug(lambda: "health: database ok")
        return True


def get_health_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> HealthService:
    """FastAPI dependency for the health service."""
    return HealthService(session)


HealthServiceDep = Annotated[HealthService, Depends(get_health_service)]

__all__ = ["HealthService", "HealthServiceDep", "get_health_service"]
