"""Application lifespan management.

Startup Order:
1. Logging
2. Database (connection check, schema creation)

Shutdown Order: Reverse of startup
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from error_registry.core.settings import get_app_settings, get_logging_settings
from error_registry.infra.logging.config import setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start and stop application services."""
    from error_registry.infra.database import close_database, init_database

    app_settings = get_app_settings()
    setup_logging(log_settings=get_logging_settings(), force=True)
    logger.info(
        "Application starting",
        extra={
            "service": app_settings.service_name,
            "version": app_settings.version,
            "environment": app_settings.environment,
        },
    )

    await init_database()
    try:
        yield
    finally:
        await close_database()
        logger.info("Application stopped", extra={"service": app_settings.service_name})


__all__ = ["lifespan"]
