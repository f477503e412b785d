"""
Request-scoped value types for the recommendation pipeline.

QueryDescriptor is produced by the input normalizer, PromptPair by the prompt
composer. Both are immutable and live only for the duration of one request.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_RESULT_LIMIT = 5


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class QueryDescriptor:
    """
    Normalized recommendation request.

    Invariant: free_text_query is set or interests is non-empty.

    Attributes:
        free_text_query: Stripped free-text request, None when blank
        interests: Stripped, non-blank interests in request order
        location: Coordinates to search around
        radius_km: Search radius, only meaningful with a location
        place_type: Kind of place to restrict results to
        location_name: Free-text place name (interest expansion)
        result_limit: Maximum number of results, >= 1
    """
    free_text_query: Optional[str] = None
    interests: Tuple[str, ...] = ()
    location: Optional[GeoPoint] = None
    radius_km: Optional[float] = None
    place_type: Optional[str] = None
    location_name: Optional[str] = None
    result_limit: int = DEFAULT_RESULT_LIMIT


@dataclass(frozen=True)
class PromptPair:
    system_prompt: str
    user_prompt: str
    result_limit: int
