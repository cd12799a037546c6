"""API router for the categories feature.

Endpoints:
    GET /categories                 - Paginated list (keyset mode unless a page is given)
    GET /categories/{category_id}   - Single category

Example Usage:
    # First page, then follow links.next
    GET /categories?sort=name&limit=10
    GET /categories?sort=name&limit=10&cursor=eyJpZCI6...&direction=next
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from error_registry.core.dependencies import DbSession, ListRequest  # noqa: TC001
from error_registry.core.pagination import PaginatedResponse
from error_registry.core.schemas import ErrorResponse
from error_registry.features.categories.schemas import CategoryResponse
from error_registry.features.categories.service import CategoryService, get_category_service

router = APIRouter(prefix="/categories", tags=["categories"])

CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]


@router.get(
    "",
    response_model=PaginatedResponse[CategoryResponse],
    response_model_exclude_none=True,
    summary="List categories",
    description=(
        "Cursor-paginated categories. Sort by id, name, description, createdAt or "
        "updatedAt; search name and description; include errorCodes."
    ),
    responses={400: {"model": ErrorResponse, "description": "Invalid list request"}},
)
async def list_categories(
    http_request: Request,
    session: DbSession,
    request: ListRequest,
    service: CategoryServiceDep,
) -> PaginatedResponse[CategoryResponse]:
    """List categories."""
    result = await service.list(session, request, base_url=http_request.url.path)
    return PaginatedResponse[CategoryResponse].from_result(result, CategoryResponse)


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    response_model_exclude_none=True,
    summary="Get a category",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid include"},
        404: {"model": ErrorResponse, "description": "Category not found"},
    },
)
async def get_category(
    category_id: int,
    session: DbSession,
    service: CategoryServiceDep,
    include: Annotated[str | None, Query(description="Comma-separated relations")] = None,
) -> CategoryResponse:
    """Get a single category by ID."""
    category = await service.get(session, category_id, include=include)
    return CategoryResponse.model_validate(category)
