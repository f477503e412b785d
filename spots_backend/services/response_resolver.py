"""
Response resolver - raw model text to the typed result.

The model is instructed, not guaranteed, to follow the output format, so
interest lists go through a two-tier parser:

1. Strict JSON array (markdown code fences are stripped first)
2. Comma split with whitespace trimmed from each segment

Results are truncated to the requested limit, never padded. Recommendation
and query text is returned verbatim (trimmed); it is prose by design and is
not parsed.

Empty model output is not an error: interest lists resolve to [] and
narratives to EMPTY_NARRATIVE_FALLBACK.
"""

import json
import logging
import re
from typing import List

from spots_backend.schemas.recommendations import RecommendationSet
from spots_backend.utils.logging import preview

logger = logging.getLogger(__name__)

EMPTY_NARRATIVE_FALLBACK = "Sorry, I couldn't generate any recommendations."

_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*([\s\S]*?)\s*```$")


def _strip_code_fence(text: str) -> str:
    match = _CODE_FENCE.match(text)
    return match.group(1).strip() if match else text


def _narrative_text(raw: str) -> str:
    text = (raw or "").strip()
    if not text:
        logger.warning("Model returned no text; using fallback narrative")
        return EMPTY_NARRATIVE_FALLBACK
    return text


def resolve_interest_list(raw: str, limit: int) -> List[str]:
    """
    Coerce raw model text into at most `limit` interest strings.

    Examples:
        >>> resolve_interest_list('["a","b","c"]', 2)
        ['a', 'b']
        >>> resolve_interest_list("coffee, tea, museums", 2)
        ['coffee', 'tea']
        >>> resolve_interest_list("   ", 5)
        []
    """
    text = (raw or "").strip()
    if not text:
        logger.warning("Model returned an empty interest list")
        return []

    candidate = _strip_code_fence(text)

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError:
        parsed = None

    if isinstance(parsed, list):
        interests = [str(item).strip() for item in parsed if item is not None and str(item).strip()]
    else:
        # A JSON string literal is split on its decoded value, not its quotes
        if isinstance(parsed, str):
            candidate = parsed
        logger.warning(f"Interest output was not a JSON array, using comma split: {preview(candidate)!r}")
        interests = [segment.strip() for segment in candidate.split(",") if segment.strip()]

    return interests[:limit]


def resolve_recommendation_set(raw: str) -> RecommendationSet:
    """Wrap the model's prose as a narrative RecommendationSet."""
    return RecommendationSet(kind="narrative", items=[], narrative=_narrative_text(raw))


def resolve_query_answer(raw: str) -> str:
    return _narrative_text(raw)
