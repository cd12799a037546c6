"""Global exception handlers for FastAPI application.

Every error leaves the service with the same body:

    {"statusCode": 400, "error": "Bad Request", "message": "...",
     "type": "invalid-cursor", "instance": "/api/v1/categories", "request_id": "..."}
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from error_registry.core.database.exceptions import NotFoundError
from error_registry.core.exceptions import AppException
from error_registry.core.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)

# Leading entries of a validation error location that name where the value came from
_REQUEST_SOURCES = frozenset({"query", "path", "header", "cookie", "body"})


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state."""
    return getattr(request.state, "request_id", None)


def _create_error_body(
    request: Request,
    status_code: int,
    message: str,
    type_: str | None = None,
    title: str | None = None,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Create the JSON error body.

    Args:
        request: The FastAPI request object.
        status_code: HTTP status code.
        message: Human-readable error description.
        type_: Error type identifier.
        title: Short human-readable summary (defaults to the status phrase).
        extra: Additional context merged into the body.

    Returns:
        Dictionary representing the error response.
    """
    body = ErrorResponse(
        statusCode=status_code,
        error=title or AppException._default_title(status_code),
        message=message,
        type=type_,
        instance=request.url.path,
        request_id=_get_request_id(request),
    ).model_dump(exclude_none=True)

    # Context never overrides the fixed fields
    if extra:
        for key, value in extra.items():
            body.setdefault(key, value)
    return body


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions (including pagination errors)."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Application exception occurred",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "method": request.method,
            "exception_type": exc.type,
            "status_code": exc.status_code,
            "detail": exc.detail,
        },
        exc_info=exc.status_code >= 500,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_create_error_body(
            request,
            exc.status_code,
            exc.detail,
            type_=exc.type,
            title=exc.title,
            extra=exc.extra,
        ),
    )


async def not_found_exception_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Handle repository lookups that found nothing."""
    logger.info(
        "Entity not found",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "entity": exc.model_name,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=_create_error_body(
            request,
            status.HTTP_404_NOT_FOUND,
            exc.message,
            type_="not-found",
        ),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI request validation errors (path and query parameters).

    Rendered as 400 so that every malformed request, whether caught by
    FastAPI or by the list request parser, looks the same to clients.
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = list(first.get("loc", ()))
    if loc and loc[0] in _REQUEST_SOURCES:
        loc = loc[1:]
    field_path = ".".join(str(part) for part in loc) or "request"
    message = f"Invalid {field_path} parameter: {first.get('msg', 'invalid value')}"

    logger.warning(
        "Request validation failed",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "method": request.method,
            "error_count": len(errors),
        },
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_create_error_body(
            request,
            status.HTTP_400_BAD_REQUEST,
            message,
            type_="validation-error",
        ),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render framework HTTP errors (unknown route, wrong method) in the same shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_create_error_body(request, exc.status_code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    Logs the full traceback and returns a generic 500 without internal details.
    """
    logger.error(
        "Unexpected exception occurred",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
        },
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_create_error_body(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred while processing your request",
            type_="internal-error",
        ),
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the application.

    Example:
        app = FastAPI()
        configure_exception_handlers(app)
    """
    # Custom application exceptions
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]

    # Repository lookups
    app.add_exception_handler(NotFoundError, not_found_exception_handler)  # type: ignore[arg-type]

    # FastAPI validation errors
    app.add_exception_handler(
        RequestValidationError,
        validation_exception_handler,  # type: ignore[arg-type]
    )

    # Framework HTTP errors
    app.add_exception_handler(
        StarletteHTTPException,
        http_exception_handler,  # type: ignore[arg-type]
    )

    # Catch-all for unexpected exceptions
    app.add_exception_handler(Exception, generic_exception_handler)


__all__ = [
    "app_exception_handler",
    "configure_exception_handlers",
    "generic_exception_handler",
    "http_exception_handler",
    "not_found_exception_handler",
    "validation_exception_handler",
]
