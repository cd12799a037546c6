"""Offset and keyset pagination for list endpoints.

Every list endpoint accepts the same query parameters (``limit``, ``page``,
``cursor``, ``sort``, ``order``, ``direction``, ``search``, ``include`` and
``field=op:value`` filters) and answers with the same envelope:

    @router.get("", response_model=PaginatedResponse[CategoryResponse])
    async def list_categories(session: DbSession, request: ListRequest, http: Request):
        result = await paginate(
            session,
            ErrorCategory,
            CATEGORY_CAPABILITIES,
            request,
            base_url=str(http.url.path),
        )
        return PaginatedResponse[CategoryResponse].from_result(result, CategoryResponse)

A ``page`` selects offset mode (totals, first/last links); a ``cursor``
selects keyset mode (stable under concurrent inserts, no totals).
"""

from error_registry.core.pagination.capabilities import PaginationMode, QueryCapabilities
from error_registry.core.pagination.cursor import CursorCodec, CursorData
from error_registry.core.pagination.engine import paginate
from error_registry.core.pagination.exceptions import (
    InvalidCursorError,
    InvalidFieldError,
    InvalidFilterError,
    InvalidPaginationParameterError,
    InvalidRelationError,
    PaginationError,
    StorageError,
)
from error_registry.core.pagination.filters import build_filter_clause, parse_filter
from error_registry.core.pagination.keyset import KeysetPaginator
from error_registry.core.pagination.links import build_link
from error_registry.core.pagination.offset import OffsetPaginator
from error_registry.core.pagination.params import RESERVED_PARAMS, PaginationRequest
from error_registry.core.pagination.query import ListQuery, build_list_query
from error_registry.core.pagination.schemas import (
    PageResult,
    PaginatedResponse,
    PaginationLinks,
    PaginationMeta,
)

__all__ = [
    "RESERVED_PARAMS",
    # Cursor utilities
    "CursorCodec",
    "CursorData",
    # Errors
    "InvalidCursorError",
    "InvalidFieldError",
    "InvalidFilterError",
    "InvalidPaginationParameterError",
    "InvalidRelationError",
    # Engines
    "KeysetPaginator",
    "ListQuery",
    "OffsetPaginator",
    # Schemas
    "PageResult",
    "PaginatedResponse",
    "PaginationError",
    "PaginationLinks",
    "PaginationMeta",
    "PaginationMode",
    "PaginationRequest",
    "QueryCapabilities",
    "StorageError",
    "build_filter_clause",
    "build_link",
    "build_list_query",
    "paginate",
    "parse_filter",
]
