"""Database infrastructure package.

Example:
    from error_registry.infra.database import get_async_session

    async with get_async_session() as session:
        result = await session.execute(...)
"""

from .session import (
    AsyncSessionLocal,
    close_database,
    create_schema,
    engine,
    get_async_session,
    init_database,
)

__all__ = [
    "AsyncSessionLocal",
    "close_database",
    "create_schema",
    "engine",
    "get_async_session",
    "init_database",
]
