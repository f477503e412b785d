"""
Recommendation System - Prompt Templates and Value Types

Architecture:
- Pattern: Single-shot LLM call (no tools, no conversation memory)
- Model: Gemini 2.5 Flash via the Google Gen AI SDK
- Temperature: 0.7
- Output: prose for recommendations and answers, JSON array for interests

The pipeline orchestration is in:
- spots_backend/services/recommendation_service.py

Prompt templates are in:
- spots_backend/agents/recommendation/prompts.py
"""

from spots_backend.agents.recommendation.prompts import (
    INTEREST_EXPANSION_SYSTEM_PROMPT,
    QUERY_SYSTEM_PROMPT,
    RECOMMENDATION_SYSTEM_PROMPT,
    build_interest_expansion_prompt,
    build_query_prompt,
    build_recommendation_prompt,
)
from spots_backend.agents.recommendation.types import (
    DEFAULT_RESULT_LIMIT,
    GeoPoint,
    PromptPair,
    QueryDescriptor,
)

__all__ = [
    "RECOMMENDATION_SYSTEM_PROMPT",
    "INTEREST_EXPANSION_SYSTEM_PROMPT",
    "QUERY_SYSTEM_PROMPT",
    "build_recommendation_prompt",
    "build_interest_expansion_prompt",
    "build_query_prompt",
    "DEFAULT_RESULT_LIMIT",
    "GeoPoint",
    "PromptPair",
    "QueryDescriptor",
]
