"""
Health check route for the Spots backend.

This endpoint is PUBLIC (no authentication required) and provides a simple
status check for load balancers, monitoring, and deployment verification.
It also reports whether AI endpoints are live or serving mock data.
"""

from fastapi import APIRouter

from spots_backend.schemas.health import HealthResponse
from spots_backend.services.degraded_mode import is_degraded_mode
from spots_backend.utils.logging import get_logger

logger = get_logger(__name__)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description=(
        "Public health check endpoint (no authentication required). "
        "Returns a status indicator and the AI generation mode."
    ),
    status_code=200,
)
async def health_check() -> HealthResponse:
    """
    Public health check endpoint.

    Example response:
        {
            "status": "ok",
            "mode": "degraded"
        }
    """
    logger.debug("Health check endpoint called")

    return HealthResponse(status="ok", mode="degraded" if is_degraded_mode() else "live")
