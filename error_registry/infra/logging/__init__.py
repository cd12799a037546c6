"""Logging infrastructure.

Usage:
    import logging
    from error_registry.infra.logging import get_lazy_logger, set_log_context

    logger = logging.getLogger(__name__)
    lazy_logger = get_lazy_logger(__name__)

    set_log_context(request_id="abc-123")
    logger.info("Listing categories")
    lazy_logger.debug(lambda: f"statement: {render(stmt)}")
"""

from __future__ import annotations

from error_registry.infra.logging.config import configure_logging, setup_logging
from error_registry.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    set_log_context,
)
from error_registry.infra.logging.formatters import JSONFormatter
from error_registry.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "set_log_context",
    "setup_logging",
]
