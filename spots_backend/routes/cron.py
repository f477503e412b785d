"""
Scheduler-triggered routes.

These endpoints are called by an external scheduler (once a day), not by
the app. Every route in this router requires the shared secret:

    Authorization: Bearer <CRON_SECRET>

Endpoints:
- GET /api/cron/refresh-trending: Rebuild the trending-city cache
"""

import logging
import uuid

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from spots_backend.auth.dependencies import verify_cron_secret
from spots_backend.schemas.recommendations import ErrorResponse
from spots_backend.schemas.refresh import RefreshOutcome, RefreshResponse
from spots_backend.services.trending_service import TrendingCityCache, get_trending_cache

logger = logging.getLogger(__name__)

# The secret is checked before any endpoint dependency or body runs
router = APIRouter(
    prefix="/api/cron",
    tags=["cron"],
    dependencies=[Depends(verify_cron_secret)],
)


@router.get(
    "/refresh-trending",
    response_model=RefreshResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid scheduler secret"},
        500: {"model": RefreshResponse, "description": "Refresh failed"},
    },
    summary="Refresh trending cities",
    description="""
    Rebuilds the trending-city cache. Idempotent: repeated or concurrent
    calls leave a complete snapshot.

    **Authentication:** `Authorization: Bearer <CRON_SECRET>` (401 otherwise,
    and no refresh is attempted).

    The response relays the refresh outcome plus a `requestId` taken from
    the `X-Request-ID` header or generated.
    """,
)
async def refresh_trending_endpoint(
    request: Request,
    cache: TrendingCityCache = Depends(get_trending_cache),
) -> JSONResponse:
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    logger.info(f"Starting trending cities refresh (request_id={request_id})")

    try:
        outcome = await cache.refresh()
    except Exception as e:
        logger.error(f"Trending refresh raised (request_id={request_id}): {e}")
        outcome = RefreshOutcome(success=False, error=str(e))

    response = RefreshResponse.from_outcome(outcome, request_id)
    if outcome.success:
        logger.info(f"Trending refresh completed (request_id={request_id}, count={outcome.count})")
        status_code = status.HTTP_200_OK
    else:
        logger.error(f"Trending refresh failed (request_id={request_id}): {outcome.error}")
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(by_alias=True, exclude_none=True),
    )
