"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from error_registry.core.settings import get_app_settings
from error_registry.features.categories.router import router as categories_router
from error_registry.features.errors.router import router as errors_router
from error_registry.features.health.router import router as health_router
from error_registry.features.translations.router import router as translations_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from error_registry.core.settings.app import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Register all feature routers with the application.

    Args:
        app: FastAPI application instance.
        app_settings: Optional application settings override for the API prefix.
    """
    app_settings = app_settings or get_app_settings()
    api_prefix = app_settings.api_prefix

    app.include_router(errors_router, prefix=api_prefix, tags=["errors"])
    app.include_router(categories_router, prefix=api_prefix, tags=["categories"])
    app.include_router(translations_router, prefix=api_prefix, tags=["translations"])
    app.include_router(health_router, prefix=api_prefix, tags=["health"])

    logger.debug("Routers registered", extra={"api_prefix": api_prefix})


__all__ = ["setup_routers"]
