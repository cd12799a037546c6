"""Errors raised while validating or executing a list request.

Every client-side error is a ``BadRequestException`` and is rendered by the
global handler as a 400 response. Validation runs before any query is sent,
so none of these errors leave a partially executed request behind.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from error_registry.core.exceptions import BadRequestException, InternalServerException


class PaginationError(BadRequestException):
    """Base class for rejected list requests."""

    def __init__(
        self,
        detail: str,
        type: str = "invalid-list-request",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail=detail, type=type, extra=extra)


class InvalidCursorError(PaginationError):
    """Cursor token is empty, malformed, or issued for a different ordering."""

    def __init__(self, reason: str | None = None) -> None:
        detail = "Invalid cursor format" if not reason else f"Invalid cursor format: {reason}"
        super().__init__(detail, type="invalid-cursor")
        self.reason = reason


class InvalidFieldError(PaginationError):
    """Sort or filter field is not in the entity's allow-list."""

    def __init__(self, field: str, allowed: Iterable[str], *, usage: str = "sort") -> None:
        allowed_fields = sorted(allowed)
        if usage == "sort":
            detail = (
                f"Sorting by field '{field}' is not allowed. "
                f"Allowed fields are: {', '.join(allowed_fields)}"
            )
        else:
            detail = (
                f"Filtering by field '{field}' is not allowed. "
                f"Allowed fields are: {', '.join(allowed_fields)}"
            )
        super().__init__(
            detail,
            type="invalid-field",
            extra={"field": field, "usage": usage},
        )
        self.field = field
        self.allowed = allowed_fields


class InvalidRelationError(PaginationError):
    """Requested include is not in the entity's relation allow-list."""

    def __init__(self, invalid: Iterable[str], allowed: Iterable[str]) -> None:
        self.invalid = list(invalid)
        self.allowed = sorted(allowed)
        detail = (
            f"Invalid relations included: {', '.join(self.invalid)}. "
            f"Allowed relations are: {', '.join(self.allowed) or 'none'}"
        )
        super().__init__(detail, type="invalid-relation")


class InvalidFilterError(PaginationError):
    """Filter expression could not be parsed or coerced to the column type."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            f"Invalid filter for field '{field}': {reason}",
            type="invalid-filter",
            extra={"field": field},
        )
        self.field = field
        self.reason = reason


class InvalidPaginationParameterError(PaginationError):
    """A reserved query parameter (limit, page, order, ...) is malformed."""

    def __init__(self, parameter: str, reason: str) -> None:
        super().__init__(
            f"Invalid {parameter} parameter: {reason}",
            type="invalid-parameter",
            extra={"parameter": parameter},
        )
        self.parameter = parameter


class StorageError(InternalServerException):
    """The underlying query failed. Not retried."""

    def __init__(self, entity: str) -> None:
        super().__init__(
            f"Failed to load {entity} list",
            type="storage-error",
            extra={"entity": entity},
        )
        self.entity = entity


__all__ = [
    "InvalidCursorError",
    "InvalidFieldError",
    "InvalidFilterError",
    "InvalidPaginationParameterError",
    "InvalidRelationError",
    "PaginationError",
    "StorageError",
]
