"""Database session management with psycopg3 async driver."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.ext.asyncio import async_sessionmaker as _async_sessionmaker
from sqlalchemy.ext.asyncio import create_async_engine as _create_async_engine

from error_registry.core.settings import get_app_settings, get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

# Get settings from modular configuration
db_settings = get_db_settings()
app_settings = get_app_settings()

# Create async engine (psycopg3, or aiosqlite when PostgreSQL is disabled)
engine = _create_async_engine(
    db_settings.url,
    **{
        **db_settings.sqlalchemy_engine_kwargs(),
        "echo": db_settings.echo or app_settings.debug,
    },
)

# Create session factory
AsyncSessionLocal = _async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)


async def create_schema() -> None:
    """Create registry tables that don't exist yet.

    Idempotent thanks to SQLAlchemy's ``checkfirst`` guard.
    """
    from error_registry.core.database import Base
    from error_registry.features import models  # noqa: F401  (registers mappers)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Yields:
        Database session that is automatically closed.

    Example:
        async with get_async_session() as session:
            result = await session.execute(select(ErrorCode))
            codes = result.scalars().all()
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_database() -> None:
    """Check the database connection and ensure the schema exists.

    Called during application startup.

    Raises:
        SQLAlchemyError: If the database is unreachable.
    """
    safe_url = engine.url.render_as_string(hide_password=True)
    logger.info("Initializing database connection", extra={"url": safe_url})

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        await create_schema()
    except Exception as e:
        logger.error(
            "Failed to connect to database",
            extra={"url": safe_url, "error": str(e)},
        )
        raise

    logger.info(
        "Database connection established successfully",
        extra={"url": safe_url, "driver": engine.url.get_driver_name()},
    )


async def close_database() -> None:
    """Close database connection and cleanup resources.

    This should be called during application shutdown.
    """
    logger.info("Closing database connection")

    try:
        await engine.dispose()
        logger.info("Database connection closed successfully")
    except Exception as e:
        logger.exception("Error closing database connection", extra={"error": str(e)})


# Re-export for convenience
create_async_engine = _create_async_engine
async_sessionmaker = _async_sessionmaker

__all__ = [
    "AsyncSessionLocal",
    "async_sessionmaker",
    "close_database",
    "create_async_engine",
    "create_schema",
    "engine",
    "get_async_session",
    "init_database",
]
