"""Health check API endpoints.

- Liveness: /health - Is the process alive?
- Readiness: /health/ready - Can the service reach its database?
"""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from error_registry.features.health.schemas import HealthResponse, ReadinessResponse

# Import dependencies at runtime so FastAPI treats them as Depends()
from error_registry.features.health.service import HealthServiceDep  # noqa: TC001

router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Returns 200 if the service process is alive and responsive",
)
async def liveness_check(service: HealthServiceDep) -> HealthResponse:
    """Liveness probe endpoint."""
    return HealthResponse(**service.liveness())


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Service not ready to accept traffic"}},
    summary="Readiness probe",
    description="Returns 200 if the database is reachable, 503 if not",
)
async def readiness_check(response: Response, service: HealthServiceDep) -> ReadinessResponse:
    """Readiness probe endpoint.

    Returns:
        ReadinessResponse with the database check result.
    """
    result = await service.readiness()
    if not result["ready"]:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(**result)
