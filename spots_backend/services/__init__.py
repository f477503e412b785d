"""
Service layer for the Spots backend.

Contains the AI request pipeline and the trending-city cache:
- query_normalizer: raw request body -> QueryDescriptor
- degraded_mode: mock output when no provider key is configured
- generation_transport: buffered and streaming Gemini adapters
- response_resolver: raw model text -> typed result
- recommendation_service: pipeline orchestration
- trending_service: scheduled trending-city refresh

Services act as the glue between routes (HTTP layer) and the AI provider.
"""

from .recommendation_service import (
    answer_query,
    expand_interests,
    generate_recommendations,
    stream_recommendations,
)
from .trending_service import TrendingCityCache, get_trending_cache

__all__ = [
    "answer_query",
    "expand_interests",
    "generate_recommendations",
    "stream_recommendations",
    "TrendingCityCache",
    "get_trending_cache",
]
