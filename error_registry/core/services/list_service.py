"""Generic read service for paginated entities.

Example:
    class CategoryService(ListService[ErrorCategory]):
        model = ErrorCategory
        capabilities = CATEGORY_CAPABILITIES

    service = CategoryService()
    page = await service.list(session, request, base_url="/api/v1/categories")
    category = await service.get(session, 7, include="errorCodes")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from sqlalchemy.orm import selectinload

from error_registry.core.database import BaseRepository
from error_registry.core.pagination.engine import paginate
from error_registry.core.services.base import BaseService
from error_registry.core.settings import get_pagination_settings

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from error_registry.core.pagination.capabilities import QueryCapabilities
    from error_registry.core.pagination.params import PaginationRequest
    from error_registry.core.pagination.schemas import PageResult


class ListService[T](BaseService):
    """Bind a model to its query capabilities and expose list/get.

    Subclasses set ``model`` and ``capabilities``.
    """

    model: ClassVar[type[Any]]
    capabilities: ClassVar[QueryCapabilities]

    def __init__(self) -> None:
        super().__init__()
        self.repository: BaseRepository[T] = BaseRepository(self.model)

    async def list(
        self,
        session: AsyncSession,
        request: PaginationRequest,
        *,
        base_url: str | None = None,
    ) -> PageResult[T]:
        """Return one page of entities.

        Raises:
            PaginationError: Request rejected (400)
            StorageError: Query failed (500)
        """
        settings = get_pagination_settings()
        result = await paginate(
            session,
            self.model,
            self.capabilities,
            request,
            base_url=base_url,
            strict_filters=settings.strict_filters,
        )
        self._lazy.debug(
            lambda: f"list: {self.model.__name__} -> {len(result.items)} items"
        )
        return result

    async def get(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        include: str | None = None,
    ) -> T:
        """Return one entity with the requested relations loaded.

        Raises:
            InvalidRelationError: Include not allowed (400)
            NotFoundError: No entity with that id (404)
        """
        relations = self.capabilities.parse_includes(include)
        options = [
            selectinload(getattr(self.model, self.capabilities.relationship_for(relation)))
            for relation in relations
        ]
        return await self.repository.get_or_raise(session, id, options=options)


__all__ = ["ListService"]
