"""Page-number pagination.

Offset mode answers "give me page N" and reports totals. The slice and
the total count come back from a single statement using a window count:

    SELECT error_codes.*, count(*) OVER () AS total_count
    FROM error_codes
    WHERE ...
    ORDER BY created_at DESC, id DESC
    LIMIT 20 OFFSET 40

A separate ``COUNT(*)`` is issued only when the requested page lies past
the end, since an empty slice carries no window count.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from error_registry.core.database.filters import LimitOffset, OrderBy
from error_registry.core.pagination.exceptions import StorageError
from error_registry.core.pagination.links import build_link
from error_registry.core.pagination.schemas import PageResult, PaginationLinks, PaginationMeta
from error_registry.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from error_registry.core.pagination.params import PaginationRequest
    from error_registry.core.pagination.query import ListQuery


class OffsetPaginator:
    """Paginate a ListQuery by page number."""

    __slots__ = ("_logger", "_lazy")

    def __init__(self) -> None:
        self._logger = logging.getLogger("pagination.offset")
        self._lazy = get_lazy_logger("pagination.offset")

    async def paginate(
        self,
        session: AsyncSession,
        query: ListQuery,
        request: PaginationRequest,
        *,
        base_url: str | None = None,
    ) -> PageResult[Any]:
        """Fetch one page.

        Args:
            session: Database session
            query: Validated base query
            request: List request (``page`` defaults to 1)
            base_url: URL the navigation links are built on

        Returns:
            Page of ORM rows with totals and first/prev/next/last links

        Raises:
            StorageError: If the database rejects the query
        """
        page = request.page or 1
        limit = request.limit
        skip = (page - 1) * limit

        stmt = query.statement.add_columns(func.count().over().label("total_count"))
        stmt = OrderBy(
            query.order_columns,
            request.order.lower(),
            nulls_largest=query.sort_nullable,
        ).apply(stmt)
        stmt = LimitOffset(limit=limit, offset=skip).apply(stmt)
        if query.options:
            stmt = stmt.options(*query.options)

        try:
            rows = (await session.execute(stmt)).all()
            if rows:
                total = rows[0].total_count
            elif page > 1:
                total = await self._count(session, query)
            else:
                total = 0
        except SQLAlchemyError as e:
            self._logger.warning(
                "Offset pagination query failed",
                extra={"entity": query.entity, "page": page, "limit": limit},
                exc_info=True,
            )
            raise StorageError(query.entity) from e

        items = [row[0] for row in rows]
        total_pages = math.ceil(total / limit) if total else 0

        self._lazy.debug(
            lambda: (
                f"offset.paginate: {query.entity} page={page} limit={limit} "
                f"sort={query.sort_field} {request.order} -> {len(items)}/{total}"
            )
        )

        return PageResult(
            items=items,
            meta=PaginationMeta(
                items_per_page=limit,
                total_items=total,
                current_page=page,
                total_pages=total_pages,
                has_next_page=page < total_pages,
                has_previous_page=page > 1 and total_pages > 0,
            ),
            links=self._links(request, page, total_pages, base_url),
        )

    async def _count(self, session: AsyncSession, query: ListQuery) -> int:
        stmt = select(func.count()).select_from(query.statement.subquery())
        return int(await session.scalar(stmt) or 0)

    @staticmethod
    def _links(
        request: PaginationRequest,
        page: int,
        total_pages: int,
        base_url: str | None,
    ) -> PaginationLinks:
        params = request.link_params()

        def page_link(number: int) -> str | None:
            return build_link(base_url, {"page": number, **params})

        has_pages = total_pages > 0
        return PaginationLinks(
            first=page_link(1),
            prev=page_link(min(page - 1, total_pages)) if page > 1 and has_pages else None,
            next=page_link(page + 1) if page < total_pages else None,
            last=page_link(total_pages) if has_pages else None,
        )


__all__ = ["OffsetPaginator"]
