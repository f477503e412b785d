"""
Trending city routes (public, read-only).
"""

import logging

from fastapi import APIRouter, Depends, Query

from spots_backend.schemas.cities import TrendingCitiesResponse
from spots_backend.services.trending_service import TrendingCityCache, get_trending_cache

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/cities",
    tags=["cities"]
)


@router.get(
    "/trending",
    response_model=TrendingCitiesResponse,
    summary="List trending cities",
    description="Returns the current trending-city snapshot, best ranked first.",
)
async def trending_cities_endpoint(
    limit: int = Query(5, ge=1, le=50, description="Maximum number of cities"),
    cache: TrendingCityCache = Depends(get_trending_cache),
) -> TrendingCitiesResponse:
    cities = await cache.get_trending(limit)
    logger.debug(f"Returning {len(cities)} trending cities")
    return TrendingCitiesResponse(cities=cities)
