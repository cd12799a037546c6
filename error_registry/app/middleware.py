"""Middleware configuration for FastAPI application.

Request ID middleware:
1. Extracts request ID from X-Request-ID header if present
2. Generates a new UUID if header is missing
3. Stores the ID in request.state.request_id
4. Adds the ID and the request path to logging context
5. Includes X-Request-ID in response headers
6. Cleans up logging context after request completes
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from starlette.datastructures import MutableHeaders

from error_registry.infra.logging.context import clear_log_context, set_log_context

if TYPE_CHECKING:
    from fastapi import FastAPI
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

    from error_registry.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)


class RequestIDMiddleware:
    """Add unique request ID to all requests for correlation.

    Pure ASGI implementation (no BaseHTTPMiddleware) so the log context set
    here is visible to the route handler's task.

    Usage:
        app = FastAPI()
        app.add_middleware(RequestIDMiddleware)

        @app.get("/")
        async def root(request: Request):
            return {"request_id": request.state.request_id}
    """

    header_name = "x-request-id"

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        # Only process HTTP requests
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = self._extract_or_generate(scope)
        scope.setdefault("state", {})["request_id"] = request_id
        set_log_context(request_id=request_id, path=scope.get("path"))

        async def send_with_header(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message).append(self.header_name, request_id)
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            # Clean up to prevent context leakage
            clear_log_context()

    def _extract_or_generate(self, scope: Scope) -> str:
        headers = dict(scope.get("headers", []))
        header_bytes = headers.get(self.header_name.encode("latin-1"))
        if header_bytes:
            return header_bytes.decode("latin-1")
        return str(uuid.uuid4())


def configure_middleware(app: FastAPI, log_settings: LoggingSettings) -> None:
    """Configure middleware for the FastAPI application.

    Args:
        app: FastAPI application instance.
        log_settings: Logging settings (request IDs can be disabled).
    """
    if log_settings.include_request_id:
        app.add_middleware(RequestIDMiddleware)
        logger.debug("Request ID middleware enabled")


__all__ = ["RequestIDMiddleware", "configure_middleware"]
