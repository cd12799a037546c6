"""Modular Pydantic Settings v2 configuration.

Each domain (app, db, logging, pagination) has its own frozen, env-prefixed
settings model. Import settings via the cached loaders:

    from error_registry.core.settings import get_pagination_settings

    settings = get_pagination_settings()
    print(settings.max_limit)

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file
"""

from __future__ import annotations

from .app import AppSettings
from .loader import (
    clear_all_caches,
    get_app_settings,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
)
from .logs import LoggingSettings
from .pagination import PaginationSettings
from .postgres import PostgresSettings

__all__ = [
    "AppSettings",
    "LoggingSettings",
    "PaginationSettings",
    "PostgresSettings",
    "clear_all_caches",
    "get_app_settings",
    "get_db_settings",
    "get_logging_settings",
    "get_pagination_settings",
]
