"""Core database package with base classes, filters and a thin repository.

Base Classes and Mixins:
    - Base: Declarative base with auto table naming
    - IntegerPKMixin: Integer primary key
    - TimestampMixin: created_at, updated_at tracking
    - TimestampedBase: Integer PK + timestamps

Repository:
    - BaseRepository[T]: Read helpers with explicit session passing

Query Filters:
    - WhereAll: AND of prebuilt conditions
    - SearchFilter: Multi-field text search with LIKE/ILIKE
    - OrderBy: Column sorting (asc/desc)
    - LimitOffset: Pagination helper

Exceptions:
    - RepositoryError: Base exception for repository operations
    - NotFoundError: Entity not found (404-like)
"""

from __future__ import annotations

from error_registry.core.database.base import (
    NAMING_CONVENTION,
    Base,
    IntegerPKMixin,
    TimestampedBase,
    TimestampMixin,
)
from error_registry.core.database.exceptions import NotFoundError, RepositoryError
from error_registry.core.database.filters import (
    LimitOffset,
    OrderBy,
    SearchFilter,
    StatementFilter,
    WhereAll,
)
from error_registry.core.database.repository import BaseRepository

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "IntegerPKMixin",
    "LimitOffset",
    "NotFoundError",
    "OrderBy",
    "RepositoryError",
    "SearchFilter",
    "StatementFilter",
    "TimestampMixin",
    "TimestampedBase",
    "WhereAll",
]
