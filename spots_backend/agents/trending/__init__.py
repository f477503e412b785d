"""
Trending Cities - Prompt Templates

Used by the scheduled refresh in spots_backend/services/trending_service.py.
"""

from spots_backend.agents.trending.prompts import (
    TRENDING_CITIES_SYSTEM_PROMPT,
    build_trending_cities_prompt,
)

__all__ = [
    "TRENDING_CITIES_SYSTEM_PROMPT",
    "build_trending_cities_prompt",
]
