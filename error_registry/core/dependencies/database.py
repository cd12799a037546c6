"""Database dependencies for FastAPI route handlers.

Two session getters exist for different use cases:

1. `get_db_session()` (this module) - FastAPI Dependency
   - Use in route handlers with `Depends(get_db_session)` or the `DbSession` alias
   - Session lifecycle tied to HTTP request

2. `get_async_session()` (infra.database) - General Context Manager
   - Use in scripts and startup code
   - Framework-agnostic async context manager

Usage:
    from error_registry.core.dependencies.database import DbSession

    @router.get("/errors/{error_id}")
    async def get_error(error_id: int, session: DbSession):
        ...
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from error_registry.infra.database import get_async_session


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for database session.

    Yields:
        Database session that is automatically closed after request.
    """
    async with get_async_session() as session:
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db_session)]

__all__ = ["DbSession", "get_db_session"]
