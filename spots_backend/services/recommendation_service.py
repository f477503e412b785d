"""
Recommendation Service - Gemini place recommendations and interest expansion

This service runs the AI request pipeline shared by every /api/ai endpoint:

    QueryDescriptor -> prompt composer -> degraded-mode gate
        -> (mock output) or (GenerationTransport -> response resolver)

Architecture:
- Pattern: Single-shot LLM call per request, no conversation memory
- Model: Gemini 2.5 Flash (configurable), temperature 0.7
- Delivery: buffered (one completion) or streaming (text chunks)
- Degraded mode: without a live GOOGLE_API_KEY every operation returns
  deterministic mock data with the live response shape and makes no
  network call

The service holds no state between requests. Inputs must already be
normalized (spots_backend/services/query_normalizer.py); transport errors
propagate to the route layer as UpstreamError. Empty model output resolves
to a default (see response_resolver.py) rather than an error.
"""

import logging
from contextlib import aclosing
from typing import AsyncIterator, List

from spots_backend.agents.recommendation.prompts import (
    build_interest_expansion_prompt,
    build_query_prompt,
    build_recommendation_prompt,
)
from spots_backend.agents.recommendation.types import QueryDescriptor
from spots_backend.schemas.recommendations import RecommendationSet
from spots_backend.services.degraded_mode import (
    is_degraded_mode,
    mock_interest_list,
    mock_query_answer,
    mock_recommendation_chunks,
    mock_recommendation_set,
)
from spots_backend.services.generation_transport import GenerationTransport, collect_text
from spots_backend.services.response_resolver import (
    resolve_interest_list,
    resolve_query_answer,
    resolve_recommendation_set,
)

logger = logging.getLogger(__name__)


def _describe(descriptor: QueryDescriptor) -> str:
    """Non-sensitive summary of a descriptor for log lines."""
    return (
        f"query={'yes' if descriptor.free_text_query else 'no'}, "
        f"interests={len(descriptor.interests)}, "
        f"location={'yes' if descriptor.location or descriptor.location_name else 'no'}, "
        f"type={descriptor.place_type or '-'}, limit={descriptor.result_limit}"
    )


async def generate_recommendations(
    descriptor: QueryDescriptor,
    transport: GenerationTransport,
) -> RecommendationSet:
    """
    Generate place recommendations.

    Returns:
        kind="structured" mock set in degraded mode, kind="narrative" set
        holding the model's prose otherwise

    Raises:
        UpstreamError: Provider call failed
    """
    logger.info(f"generate_recommendations called ({_describe(descriptor)})")
    prompt = build_recommendation_prompt(descriptor)

    if is_degraded_mode():
        logger.info("Degraded mode: returning mock recommendations")
        return mock_recommendation_set(descriptor)

    raw = await collect_text(transport, prompt)
    return resolve_recommendation_set(raw)


async def stream_recommendations(
    descriptor: QueryDescriptor,
    transport: GenerationTransport,
) -> AsyncIterator[str]:
    """
    Stream place recommendations as text chunks, in provider order.

    Closing this generator closes the transport's stream as well, so a
    disconnected client stops upstream reads immediately.
    """
    logger.info(f"stream_recommendations called ({_describe(descriptor)})")
    prompt = build_recommendation_prompt(descriptor)

    if is_degraded_mode():
        logger.info("Degraded mode: streaming mock recommendations")
        for chunk in mock_recommendation_chunks(descriptor):
            yield chunk
        return

    logger.info(f"Streaming recommendations from {transport.mode} transport")
    async with aclosing(transport.generate(prompt)) as chunks:
        async for chunk in chunks:
            yield chunk


async def expand_interests(
    descriptor: QueryDescriptor,
    transport: GenerationTransport,
) -> List[str]:
    """
    Suggest interests related to descriptor.interests.

    Returns:
        At most descriptor.result_limit interests

    Raises:
        UpstreamError: Provider call failed
    """
    logger.info(f"expand_interests called ({_describe(descriptor)})")
    prompt = build_interest_expansion_prompt(descriptor)

    if is_degraded_mode():
        logger.info("Degraded mode: returning mock interests")
        return mock_interest_list(descriptor)

    raw = await collect_text(transport, prompt)
    interests = resolve_interest_list(raw, prompt.result_limit)
    logger.info(f"Returning {len(interests)} interests")
    return interests


async def answer_query(
    descriptor: QueryDescriptor,
    transport: GenerationTransport,
) -> str:
    """Answer a natural-language question about places."""
    logger.info(f"answer_query called ({_describe(descriptor)})")
    prompt = build_query_prompt(descriptor)

    if is_degraded_mode():
        logger.info("Degraded mode: returning placeholder answer")
        return mock_query_answer(descriptor)

    raw = await collect_text(transport, prompt)
    return resolve_query_answer(raw)
