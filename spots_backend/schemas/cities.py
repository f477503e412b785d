"""
Trending city schemas.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


class TrendingCity(BaseModel):
    """One row of the trending-city snapshot."""
    id: str = Field(..., description="Slug derived from the city name", examples=["mexico-city"])
    name: str
    country: Optional[str] = None
    rank: Optional[int] = Field(None, ge=1)
    reason: Optional[str] = Field(None, description="Why the city is trending right now")
    emoji: str = "🏙️"
    # (longitude, latitude), as the map widget expects
    coordinates: Tuple[float, float] = (0.0, 0.0)
    last_updated: Optional[str] = None


class TrendingCitiesResponse(BaseModel):
    """Response for GET /api/cities/trending."""
    cities: List[TrendingCity]
