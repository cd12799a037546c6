"""Entry point that validates a list request and runs the right paginator."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from error_registry.core.pagination.exceptions import PaginationError
from error_registry.core.pagination.keyset import KeysetPaginator
from error_registry.core.pagination.offset import OffsetPaginator
from error_registry.core.pagination.query import build_list_query
from error_registry.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from error_registry.core.pagination.capabilities import QueryCapabilities
    from error_registry.core.pagination.params import PaginationRequest
    from error_registry.core.pagination.schemas import PageResult

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)

_offset = OffsetPaginator()
_keyset = KeysetPaginator()


async def paginate(
    session: AsyncSession,
    model: type[Any],
    capabilities: QueryCapabilities,
    request: PaginationRequest,
    *,
    base_url: str | None = None,
    strict_filters: bool = True,
) -> PageResult[Any]:
    """List ``model`` rows according to ``request``.

    A cursor or ``startId`` selects keyset mode, a ``page`` selects offset
    mode, and otherwise the entity's default mode applies. All request
    validation happens before the database is touched.

    Args:
        session: Database session
        model: Mapped class to list
        capabilities: Allow-lists for ``model``
        request: Parsed list request
        base_url: URL the navigation links are built on
        strict_filters: Reject filters on unknown fields instead of dropping them

    Returns:
        Page of ORM rows with metadata and links

    Raises:
        PaginationError: Request rejected (rendered as 400)
        StorageError: Query failed (rendered as 500)
    """
    try:
        query = build_list_query(model, capabilities, request, strict_filters=strict_filters)
    except PaginationError as e:
        logger.warning(
            "List request rejected",
            extra={"entity": model.__name__, "reason": e.detail, "error_type": e.type},
        )
        raise

    mode = request.resolve_mode(capabilities.default_mode)
    lazy_logger.debug(lambda: f"paginate: {model.__name__} mode={mode} limit={request.limit}")

    if mode == "keyset":
        return await _keyset.paginate(session, query, request, base_url=base_url)
    return await _offset.paginate(session, query, request, base_url=base_url)


__all__ = ["paginate"]
