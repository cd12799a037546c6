"""Health check response schemas."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class HealthStatus(str, Enum):
    """Health check status values."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class HealthResponse(BaseModel):
    """Liveness response.

    Example:
        ```json
        {
            "status": "healthy",
            "timestamp": "2025-01-01T00:00:00Z",
            "service": "error-registry",
            "version": "1.0.0"
        }
        ```
    """

    status: HealthStatus = Field(description="Health status")
    timestamp: datetime = Field(description="Check timestamp")
    service: str = Field(min_length=1, max_length=100, description="Service name")
    version: str = Field(min_length=1, max_length=50, description="Service version")

    model_config = ConfigDict(str_strip_whitespace=True)


class ReadinessResponse(BaseModel):
    """Readiness response with dependency checks."""

    ready: bool = Field(description="Whether the service can accept traffic")
    checks: dict[str, bool] = Field(
        default_factory=dict, description="Individual dependency health checks"
    )
    timestamp: datetime = Field(description="Check timestamp")


__all__ = ["HealthResponse", "HealthStatus", "ReadinessResponse"]
