"""API router for the translations feature.

Endpoints:
    GET /translations                    - Paginated list (keyset mode unless a page is given)
    GET /translations/{translation_id}   - Single translation
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from error_registry.core.dependencies import DbSession, ListRequest  # noqa: TC001
from error_registry.core.pagination import PaginatedResponse
from error_registry.core.schemas import ErrorResponse
from error_registry.features.translations.schemas import TranslationResponse
from error_registry.features.translations.service import (
    TranslationService,
    get_translation_service,
)

router = APIRouter(prefix="/translations", tags=["translations"])

TranslationServiceDep = Annotated[TranslationService, Depends(get_translation_service)]


@router.get(
    "",
    response_model=PaginatedResponse[TranslationResponse],
    response_model_exclude_none=True,
    summary="List translations",
    description=(
        "Cursor-paginated translations. Sort by id, language, message, errorCode or "
        "updatedAt; search message and errorCode; include error."
    ),
    responses={400: {"model": ErrorResponse, "description": "Invalid list request"}},
)
async def list_translations(
    http_request: Request,
    session: DbSession,
    request: ListRequest,
    service: TranslationServiceDep,
) -> PaginatedResponse[TranslationResponse]:
    """List translations."""
    result = await service.list(session, request, base_url=http_request.url.path)
    return PaginatedResponse[TranslationResponse].from_result(result, TranslationResponse)


@router.get(
    "/{translation_id}",
    response_model=TranslationResponse,
    response_model_exclude_none=True,
    summary="Get a translation",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid include"},
        404: {"model": ErrorResponse, "description": "Translation not found"},
    },
)
async def get_translation(
    translation_id: int,
    session: DbSession,
    service: TranslationServiceDep,
    include: Annotated[str | None, Query(description="Comma-separated relations")] = None,
) -> TranslationResponse:
    """Get a single translation by ID."""
    translation = await service.get(session, translation_id, include=include)
    return TranslationResponse.model_validate(translation)
