"""API router for the error codes feature.

Endpoints:
    GET /errors              - Paginated list (offset mode unless a cursor is given)
    GET /errors/{error_id}   - Single error code

Example Usage:
    # Newest published codes, 20 per page
    GET /errors?status=published&sort=createdAt&order=DESC&page=1

    # Codes mentioning "token", with their translations
    GET /errors?search=token&include=translations
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from error_registry.core.dependencies import DbSession, ListRequest  # noqa: TC001
from error_registry.core.pagination import PaginatedResponse
from error_registry.core.schemas import ErrorResponse
from error_registry.features.errors.schemas import ErrorCodeResponse
from error_registry.features.errors.service import ErrorCodeService, get_error_code_service

router = APIRouter(prefix="/errors", tags=["errors"])

ErrorCodeServiceDep = Annotated[ErrorCodeService, Depends(get_error_code_service)]


@router.get(
    "",
    response_model=PaginatedResponse[ErrorCodeResponse],
    response_model_exclude_none=True,
    summary="List error codes",
    description=(
        "Paginated error codes. Sort by id, code, status, context, createdAt or "
        "updatedAt; search code and context; include categories or translations."
    ),
    responses={400: {"model": ErrorResponse, "description": "Invalid list request"}},
)
async def list_errors(
    http_request: Request,
    session: DbSession,
    request: ListRequest,
    service: ErrorCodeServiceDep,
) -> PaginatedResponse[ErrorCodeResponse]:
    """List error codes."""
    result = await service.list(session, request, base_url=http_request.url.path)
    return PaginatedResponse[ErrorCodeResponse].from_result(result, ErrorCodeResponse)


@router.get(
    "/{error_id}",
    response_model=ErrorCodeResponse,
    response_model_exclude_none=True,
    summary="Get an error code",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid include"},
        404: {"model": ErrorResponse, "description": "Error code not found"},
    },
)
async def get_error(
    error_id: int,
    session: DbSession,
    service: ErrorCodeServiceDep,
    include: Annotated[str | None, Query(description="Comma-separated relations")] = None,
) -> ErrorCodeResponse:
    """Get a single error code by ID."""
    error_code = await service.get(session, error_id, include=include)
    return ErrorCodeResponse.model_validate(error_code)
