"""Logging configuration setup.

Configures the standard library logging tree through ``dictConfig``:
- a single stderr handler on the root logger (child loggers propagate)
- JSONL or human-readable text format
- ContextInjectingFilter for request-scoped fields
"""

from __future__ import annotations

import logging
import logging.config
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from error_registry.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)
_LOGGING_INITIALIZED = False

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    settings_obj = log_settings
    if settings_obj is None:
        from error_registry.core.settings import get_logging_settings

        settings_obj = get_logging_settings()

    log_config = {**settings_obj.to_logging_kwargs(), **configure_kwargs}
    configure_logging(**log_config)
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    console_enabled: bool = True,
    include_context: bool = True,
    capture_warnings: bool = True,
    service_name: str = "error-registry",
    sql_level: str = "WARNING",
    **kwargs: Any,
) -> None:
    """Configure logging with dictConfig.

    Args:
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_logs: Enable JSONL (JSON Lines) structured logging.
        console_enabled: Enable console/stderr logging.
        include_context: Enable ContextInjectingFilter for auto context.
        capture_warnings: Forward Python warnings to logging system.
        service_name: Static ``service`` field on every JSON record.
        sql_level: Level for the ``sqlalchemy.engine`` logger.
        **kwargs: Ignored extra settings.

    Example:
        from error_registry.core.settings import get_logging_settings
        configure_logging(**get_logging_settings().to_logging_kwargs())
    """
    if kwargs:
        logger.debug("Unused logging kwargs supplied: %s", ", ".join(sorted(kwargs)))

    if capture_warnings:
        logging.captureWarnings(True)

    formatters: dict[str, Any] = {
        "json": {
            "()": "error_registry.infra.logging.formatters.JSONFormatter",
            "static": {"service": service_name},
        },
        "text": {"format": _TEXT_FORMAT},
    }

    filters: dict[str, Any] = {}
    if include_context:
        filters["context"] = {
            "()": "error_registry.infra.logging.context.ContextInjectingFilter",
        }

    handlers: dict[str, Any] = {}
    if console_enabled:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "formatter": "json" if json_logs else "text",
            "filters": list(filters),
        }

    logging_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "sqlalchemy.engine": {"level": sql_level.upper()},
            "uvicorn.access": {"level": "WARNING"},
        },
        "root": {
            "level": log_level.upper(),
            "handlers": list(handlers),
        },
    }

    logging.config.dictConfig(logging_config)
    logger.debug(
        "Logging configured",
        extra={"log_level": log_level, "json_logs": json_logs},
    )


__all__ = ["configure_logging", "setup_logging"]
