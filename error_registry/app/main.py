"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from error_registry.app.exception_handlers import configure_exception_handlers
from error_registry.app.lifespan import lifespan
from error_registry.app.middleware import configure_middleware
from error_registry.app.router import setup_routers
from error_registry.core.settings import get_app_settings, get_logging_settings


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Settings are loaded once and cached via LRU cache.

    Returns:
        Configured FastAPI application instance.
    """
    app_settings = get_app_settings()

    app = FastAPI(
        # Core metadata
        title=app_settings.title,
        description=app_settings.description,
        version=app_settings.version,
        # Documentation URLs
        docs_url=app_settings.get_docs_url(),
        redoc_url=app_settings.get_redoc_url(),
        openapi_url=app_settings.get_openapi_url(),
        # Behavioral settings
        debug=app_settings.debug,
        # Lifecycle
        lifespan=lifespan,
    )

    # Configure exception handlers (must be before middleware)
    configure_exception_handlers(app)

    configure_middleware(app, get_logging_settings())

    setup_routers(app, app_settings)

    return app


# Application instance for uvicorn
app = create_app()
