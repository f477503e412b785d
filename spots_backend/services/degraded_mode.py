"""
Degraded-mode gate and mock generators.

When no live Gemini key is configured (CI, local builds, preview deploys) the
pipeline short-circuits here before any network call. Mock output is
deterministic for a given QueryDescriptor and has exactly the shape of the
live success payload, so callers never branch on which mode served them.
"""

import logging
from typing import Dict, Iterator, List, Tuple

from spots_backend.agents.recommendation.types import QueryDescriptor
from spots_backend.config import settings
from spots_backend.schemas.recommendations import PlaceRecommendation, RecommendationSet

logger = logging.getLogger(__name__)


# Related sub-interests served for well-known interests in degraded mode.
MOCK_SUB_INTERESTS: Dict[str, Tuple[str, ...]] = {
    "coffee": (
        "specialty coffee",
        "coffee roasting",
        "pour-over coffee",
        "espresso",
        "coffee shops with work space",
        "coffee tasting",
        "outdoor seating coffee shops",
    ),
    "hiking": (
        "nature trails",
        "mountain views",
        "waterfall hikes",
        "beginner-friendly trails",
        "challenging hikes",
        "nature photography spots",
        "dog-friendly hiking",
    ),
    "photography": (
        "street photography",
        "landscape photography",
        "portrait locations",
        "architecture photography",
        "golden hour spots",
        "photography galleries",
        "photography classes",
    ),
    "food": (
        "local cuisine",
        "fine dining",
        "food markets",
        "street food",
        "vegetarian options",
        "ethnic restaurants",
        "culinary classes",
    ),
    "art": (
        "museums",
        "art galleries",
        "street art",
        "art studios",
        "art classes",
        "sculpture gardens",
        "art events",
    ),
    "music": (
        "live music venues",
        "record shops",
        "music festivals",
        "jazz bars",
        "concert halls",
        "acoustic sets",
        "open mic nights",
    ),
}

GENERIC_SUB_INTERESTS: Tuple[str, ...] = (
    "coffee shops",
    "hiking trails",
    "bookstores",
    "museums",
    "local cuisine",
)

MOCK_PLACES: Tuple[Tuple[str, str, str, str, float], ...] = (
    # name, description, address, flavor tag, rating
    ("Example Place 1", "This is a mock recommendation served without a live AI provider.",
     "123 Example Street", "sample", 4.5),
    ("Example Place 2", "Another mock recommendation for build and test environments.",
     "456 Test Avenue", "mock", 4.2),
    ("Example Place 3", "A third mock recommendation so larger limits look realistic.",
     "789 Placeholder Road", "demo", 4.0),
)


def is_live_provider_configured() -> bool:
    """True when a real (non-placeholder) Gemini key is configured."""
    return settings.has_live_provider_key


def is_degraded_mode() -> bool:
    return not is_live_provider_configured()


def _dedupe(values: List[str]) -> List[str]:
    seen = set()
    unique = []
    for value in values:
        key = value.lower()
        if key not in seen:
            seen.add(key)
            unique.append(value)
    return unique


def mock_interest_list(descriptor: QueryDescriptor) -> List[str]:
    """
    Supplied interests first, then related sub-interests, capped at the limit.

    Example:
        interests=("hiking",), result_limit=3
        -> ["hiking", "nature trails", "mountain views"]
    """
    candidates = list(descriptor.interests)
    for interest in descriptor.interests:
        candidates.extend(MOCK_SUB_INTERESTS.get(interest.lower(), ()))
    candidates.extend(GENERIC_SUB_INTERESTS)
    return _dedupe(candidates)[:descriptor.result_limit]


def mock_recommendation_set(descriptor: QueryDescriptor) -> RecommendationSet:
    """Structured mock recommendations echoing the first interest as a tag."""
    echo_tag = descriptor.interests[0] if descriptor.interests else "general"
    count = min(descriptor.result_limit, len(MOCK_PLACES))

    items = []
    for name, description, address, flavor, rating in MOCK_PLACES[:count]:
        tags = [flavor, "placeholder", echo_tag]
        if descriptor.place_type:
            tags.append(descriptor.place_type)
        items.append(PlaceRecommendation(
            name=name,
            description=description,
            tags=_dedupe(tags),
            rating=rating,
            address=address,
        ))

    return RecommendationSet(kind="structured", items=items, narrative=None)


def mock_query_answer(descriptor: QueryDescriptor) -> str:
    return (
        f'This is a placeholder response for your query: "{descriptor.free_text_query}". '
        "In production, this would provide real recommendations based on your "
        "location and interests."
    )


def mock_recommendation_chunks(descriptor: QueryDescriptor) -> Iterator[str]:
    """Mock recommendations rendered as streamed text, one line per chunk."""
    recommendation_set = mock_recommendation_set(descriptor)
    yield "Here are some places you might enjoy (mock data, no AI provider configured):\n"
    for item in recommendation_set.items:
        yield f"- {item.name}: {item.description} ({item.address}; tags: {', '.join(item.tags)})\n"
