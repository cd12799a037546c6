"""List request dependency for paginated endpoints.

Every list endpoint takes the same reserved query parameters and treats the
rest as ``field=op:value`` filters, so the request is read from the raw
query string instead of declaring one ``Query`` per parameter.

Usage:
    from error_registry.core.dependencies.pagination import ListRequest

    @router.get("")
    async def list_categories(session: DbSession, request: ListRequest, http: Request):
        ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from error_registry.core.pagination.params import PaginationRequest
from error_registry.core.settings import get_pagination_settings


def get_list_request(request: Request) -> PaginationRequest:
    """Parse the list request from the query string.

    Page size defaults and the hard maximum come from PaginationSettings.

    Raises:
        InvalidPaginationParameterError: Malformed reserved parameter (400)
    """
    settings = get_pagination_settings()
    return PaginationRequest.from_query_params(
        request.query_params,
        default_limit=settings.default_limit,
        max_limit=settings.max_limit,
    )


ListRequest = Annotated[PaginationRequest, Depends(get_list_request)]

__all__ = ["ListRequest", "get_list_request"]
