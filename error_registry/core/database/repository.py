"""Minimal generic repository for SQLAlchemy models.

Provides basic read operations with explicit session passing.
For complex queries, use the session directly - this is a convenience, not a cage.

Example:
    from error_registry.core.database import BaseRepository
    from error_registry.features.categories.models import ErrorCategory

    repo = BaseRepository(ErrorCategory)
    category = await repo.get(session, 7)
    category = await repo.get_or_raise(
        session, 7, options=[selectinload(ErrorCategory.error_codes)]
    )
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import select

from error_registry.core.database.exceptions import NotFoundError, RepositoryError
from error_registry.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute


class BaseRepository[T]:
    """Minimal generic repository for read operations.

    Provides:
        - get(session, id) -> T | None
        - get_or_raise(session, id) -> T (raises NotFoundError)

    Session is always explicit - no hidden state.
    """

    __slots__ = ("model", "_logger", "_lazy")

    def __init__(self, model: type[T]) -> None:
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class (e.g., ErrorCode, ErrorCategory)
        """
        self.model = model
        # Standard logger for INFO/WARNING/ERROR
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    async def get(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        options: Iterable[Any] | None = None,
    ) -> T | None:
        """Get entity by primary key.

        Args:
            session: Database session
            id: Primary key value
            options: SQLAlchemy loader options (e.g., selectinload)

        Returns:
            Entity if found, None otherwise
        """
        if options:
            stmt = select(self.model).where(self._pk_attr() == id).options(*options)
            result = await session.execute(stmt)
            instance = result.scalar_one_or_none()
        else:
            instance = await session.get(self.model, id)

        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id}) -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_or_raise(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        options: Iterable[Any] | None = None,
    ) -> T:
        """Get entity by primary key or raise NotFoundError.

        Raises:
            NotFoundError: If entity doesn't exist
        """
        instance = await self.get(session, id, options=options)
        if instance is None:
            self._logger.info(
                "Entity not found",
                extra={
                    "entity": self.model.__name__,
                    "id": str(id),
                    "operation": "db.get_or_raise",
                },
            )
            raise NotFoundError(self.model.__name__, {"id": id})
        return instance

    def _pk_attr(self) -> InstrumentedAttribute[Any]:
        """Get the primary key attribute of the model."""
        mapper = sa_inspect(self.model)
        pk_cols = mapper.primary_key
        if len(pk_cols) != 1:
            raise RepositoryError(
                "Repository requires a single-column primary key",
                details={"model": self.model.__name__},
            )
        return cast("InstrumentedAttribute[Any]", getattr(self.model, pk_cols[0].key))


__all__ = ["BaseRepository"]
