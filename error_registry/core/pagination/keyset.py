"""Cursor (keyset) pagination.

Keyset mode resumes from the last row the client saw instead of skipping
``N`` rows, so pages stay stable while rows are inserted elsewhere and deep
pages cost the same as the first one.

For ``sort=name, order=ASC, direction=next`` and a cursor built from the
row ``(name='Billing', id=7)`` the seek condition is:

    WHERE name > 'Billing' OR (name = 'Billing' AND id > 7)
    ORDER BY name ASC, id ASC
    LIMIT :limit + 1

Walking backwards flips the comparison and the fetch order; the fetched
rows are reversed before being returned so ``data`` is always in the
requested order. One extra row is fetched to learn whether more exist.

Nullable sort columns order NULL above every value (``ASC NULLS LAST``,
``DESC NULLS FIRST``) and the seek condition spells the NULL cases out,
since ``x > NULL`` is never true. Moving up from ``'Billing'`` also admits
``name IS NULL``; moving up from a NULL boundary stays inside the NULL run
(``name IS NULL AND id > 7``); moving down from a NULL boundary admits
every non-NULL row.
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import and_, or_
from sqlalchemy.exc import SQLAlchemyError

from error_registry.core.database.filters import LimitOffset, OrderBy
from error_registry.core.pagination.cursor import CursorCodec, CursorData
from error_registry.core.pagination.exceptions import (
    InvalidCursorError,
    InvalidPaginationParameterError,
    StorageError,
)
from error_registry.core.pagination.filters import coerce_value
from error_registry.core.pagination.links import build_link
from error_registry.core.pagination.schemas import PageResult, PaginationLinks, PaginationMeta
from error_registry.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.sql.elements import ColumnElement

    from error_registry.core.pagination.params import PaginationRequest
    from error_registry.core.pagination.query import ListQuery


@dataclass(frozen=True, slots=True)
class SeekPlan:
    """How to seek past a cursor and in which order to fetch."""

    compare: Callable[[Any, Any], Any]
    fetch_order: Literal["asc", "desc"]


# (direction, order) -> plan
SEEK_PLANS: dict[tuple[str, str], SeekPlan] = {
    ("next", "ASC"): SeekPlan(operator.gt, "asc"),
    ("next", "DESC"): SeekPlan(operator.lt, "desc"),
    ("prev", "ASC"): SeekPlan(operator.lt, "desc"),
    ("prev", "DESC"): SeekPlan(operator.gt, "asc"),
}


class KeysetPaginator:
    """Paginate a ListQuery with opaque cursors."""

    __slots__ = ("_logger", "_lazy")

    def __init__(self) -> None:
        self._logger = logging.getLogger("pagination.keyset")
        self._lazy = get_lazy_logger("pagination.keyset")

    async def paginate(
        self,
        session: AsyncSession,
        query: ListQuery,
        request: PaginationRequest,
        *,
        base_url: str | None = None,
    ) -> PageResult[Any]:
        """Fetch the page adjacent to the request's cursor.

        Without a cursor (or ``startId``) the first page is returned.

        Args:
            session: Database session
            query: Validated base query
            request: List request
            base_url: URL the navigation links are built on

        Returns:
            Page of ORM rows with next/prev links; no totals

        Raises:
            InvalidCursorError: Cursor malformed or issued for another ordering
            InvalidPaginationParameterError: ``startId`` without required ``startValue``
            StorageError: If the database rejects the query
        """
        position = self._resolve_position(query, request)
        plan = SEEK_PLANS[(request.direction, request.order)]

        stmt = query.statement
        if position is not None:
            stmt = stmt.where(self._seek_clause(query, position, plan))
        stmt = OrderBy(
            query.order_columns,
            plan.fetch_order,
            nulls_largest=query.sort_nullable,
        ).apply(stmt)
        stmt = LimitOffset(limit=request.limit + 1).apply(stmt)
        if query.options:
            stmt = stmt.options(*query.options)

        try:
            rows = list((await session.execute(stmt)).scalars().all())
        except SQLAlchemyError as e:
            self._logger.warning(
                "Keyset pagination query failed",
                extra={"entity": query.entity, "direction": request.direction},
                exc_info=True,
            )
            raise StorageError(query.entity) from e

        has_more = len(rows) > request.limit
        items = rows[: request.limit]
        if request.direction == "prev":
            items.reverse()

        has_cursor = position is not None
        if request.direction == "next":
            has_next, has_prev = has_more, has_cursor
        else:
            has_next, has_prev = has_cursor, has_more

        self._lazy.debug(
            lambda: (
                f"keyset.paginate: {query.entity} sort={query.sort_field} {request.order} "
                f"direction={request.direction} cursor={has_cursor} -> {len(items)} "
                f"more={has_more}"
            )
        )

        return PageResult(
            items=items,
            meta=PaginationMeta(
                items_per_page=request.limit,
                has_next_page=has_next,
                has_previous_page=has_prev,
            ),
            links=self._links(query, request, items, has_next, has_prev, base_url),
        )

    def _resolve_position(
        self,
        query: ListQuery,
        request: PaginationRequest,
    ) -> CursorData | None:
        """Decode the cursor (or legacy startId/startValue) into a position."""
        if request.cursor is not None:
            position = CursorCodec.decode_cursor_data(request.cursor)
            if position.sort != query.sort_field or position.order != request.order:
                self._logger.warning(
                    "Cursor does not match request ordering",
                    extra={
                        "entity": query.entity,
                        "cursor_sort": position.sort,
                        "cursor_order": position.order,
                        "sort": query.sort_field,
                        "order": request.order,
                    },
                )
                raise InvalidCursorError(
                    f"cursor was issued for sort={position.sort} order={position.order}"
                )
            return position

        if request.start_id:
            if not query.sorts_by_id and request.start_value is None:
                raise InvalidPaginationParameterError(
                    "startValue", f"is required when sorting by '{query.sort_field}'"
                )
            start_id = self._coerce_start(query.id_column, request.start_id, "startId")
            if query.sorts_by_id:
                value = start_id
            else:
                value = self._coerce_start(query.sort_column, request.start_value, "startValue")
            return CursorData(
                id=start_id,
                value=value,
                sort=query.sort_field,
                order=request.order,
            )

        return None

    @staticmethod
    def _coerce_start(column: Any, raw: str | None, parameter: str) -> Any:
        try:
            return coerce_value(column, raw)
        except ValueError as e:
            raise InvalidPaginationParameterError(
                parameter, f"{raw!r} does not match the field type"
            ) from e

    @staticmethod
    def _seek_clause(
        query: ListQuery,
        position: CursorData,
        plan: SeekPlan,
    ) -> ColumnElement[bool]:
        try:
            last_id = coerce_value(query.id_column, position.id)
            if query.sorts_by_id:
                return plan.compare(query.id_column, last_id)
            last_value = coerce_value(query.sort_column, position.value)
        except ValueError as e:
            raise InvalidCursorError("position does not match field types") from e

        column = query.sort_column
        after_id = plan.compare(query.id_column, last_id)
        moving_up = plan.compare is operator.gt

        if last_value is None:
            if not query.sort_nullable:
                raise InvalidCursorError("position does not match field types")
            if moving_up:
                return and_(column.is_(None), after_id)
            return or_(column.is_not(None), and_(column.is_(None), after_id))

        seek = or_(
            plan.compare(column, last_value),
            and_(column == last_value, after_id),
        )
        if moving_up and query.sort_nullable:
            return or_(seek, column.is_(None))
        return seek

    @staticmethod
    def _links(
        query: ListQuery,
        request: PaginationRequest,
        items: list[Any],
        has_next: bool,
        has_prev: bool,
        base_url: str | None,
    ) -> PaginationLinks:
        if not items:
            return PaginationLinks()

        params = request.link_params()

        def cursor_link(row: Any, direction: str) -> str | None:
            cursor = CursorCodec.create_cursor(
                row,
                id_attr=query.id_attr,
                sort_field=query.sort_field,
                sort_attr=query.sort_attr,
                order=request.order,
            )
            return build_link(
                base_url,
                {**params, "cursor": cursor, "direction": direction},
                required=["cursor"],
            )

        return PaginationLinks(
            next=cursor_link(items[-1], "next") if has_next else None,
            prev=cursor_link(items[0], "prev") if has_prev else None,
        )


__all__ = ["SEEK_PLANS", "KeysetPaginator", "SeekPlan"]
