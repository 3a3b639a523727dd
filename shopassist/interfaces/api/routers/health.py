"""Health check router."""

from datetime import datetime, timezone

from fastapi import APIRouter

from shopassist.interfaces.api.schemas.common import HealthResponse
from shopassist.interfaces.api.dependencies import services_status

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check():
    """
    Health check endpoint.

    Returns:
        Health status of the application and services
    """
    services = services_status()
    healthy = all(services.values())
    return HealthResponse(
        status="OK" if healthy else "DEGRADED",
        timestamp=datetime.now(timezone.utc).isoformat(),
        services=services,
        message="All services operational" if healthy else "Services not initialized",
    )
