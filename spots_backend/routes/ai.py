"""
FastAPI routes for the AI endpoints.

Endpoints:
- POST /api/ai/recommendations: Place recommendations (buffered JSON)
- POST /api/ai/recommendations/stream: Place recommendations (streamed text)
- POST /api/ai/expand-interests: Related interest suggestions
- POST /api/ai/query: Natural-language question about places

Endpoint flow:
1. Read the raw JSON body
2. Normalize it into a QueryDescriptor (400 on failure, before any AI call)
3. Call the recommendation service with the injected GenerationTransport
4. Map the result to the response model

Bodies are read from the Request rather than declared as Pydantic parameters
so that schema failures and the "query or interests" rule produce the same
400 envelope.
"""

import json
import logging
from contextlib import aclosing
from typing import Any, AsyncIterator

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from spots_backend.schemas.recommendations import (
    ErrorResponse,
    InterestExpansionRequest,
    InterestExpansionResponse,
    QueryRequest,
    QueryResponse,
    RecommendationRequest,
    RecommendationResponse,
)
from spots_backend.services.generation_transport import (
    GenerationTransport,
    get_buffered_transport,
    get_streaming_transport,
)
from spots_backend.services.query_normalizer import (
    normalize_interest_request,
    normalize_query_request,
    normalize_recommendation_request,
)
from spots_backend.services.recommendation_service import (
    answer_query,
    expand_interests,
    generate_recommendations,
    stream_recommendations,
)
from spots_backend.utils.errors import ResolutionError, UpstreamError, ValidationError

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(
    prefix="/api/ai",
    tags=["ai"]
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request body"},
    500: {"model": ErrorResponse, "description": "AI provider or output failure"},
}


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError("Request body is not valid JSON", details=str(e)) from e


def _relabel(exc: UpstreamError, label: str) -> UpstreamError:
    """Same failure, with the endpoint-specific error label."""
    return UpstreamError(exc.message, details=exc.details, error=label)


def _body_schema(model) -> dict:
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post(
    "/recommendations",
    response_model=RecommendationResponse,
    responses=ERROR_RESPONSES,
    status_code=200,
    summary="Recommend places",
    description="""
    Recommends places from a free-text query or a list of interests,
    optionally near a location, within a radius, and of a given type.

    **Response shape:**
    - Live provider: `recommendations.kind = "narrative"` with the model's prose
    - No provider key configured: `recommendations.kind = "structured"` with mock items

    Both shapes share the same fields.
    """,
    openapi_extra=_body_schema(RecommendationRequest),
)
async def recommendations_endpoint(
    request: Request,
    transport: GenerationTransport = Depends(get_buffered_transport),
) -> RecommendationResponse:
    descriptor = normalize_recommendation_request(await _read_json(request))

    try:
        recommendation_set = await generate_recommendations(descriptor, transport)
    except UpstreamError as e:
        logger.error(f"Recommendation generation failed: {e.message}")
        raise _relabel(e, "Failed to generate recommendations") from e

    logger.info(f"Returning recommendations kind={recommendation_set.kind}")
    return RecommendationResponse(recommendations=recommendation_set)


@router.post(
    "/recommendations/stream",
    responses={
        200: {"content": {"text/plain": {}}, "description": "Recommendation text, streamed"},
        **ERROR_RESPONSES,
    },
    summary="Recommend places (streamed)",
    description="""
    Same input as POST /api/ai/recommendations, but the model output is
    forwarded as plain text while it is generated.

    Failures before the first chunk return the usual JSON error envelope.
    A failure after streaming started terminates the response early.
    """,
    openapi_extra=_body_schema(RecommendationRequest),
)
async def stream_recommendations_endpoint(
    request: Request,
    transport: GenerationTransport = Depends(get_streaming_transport),
) -> StreamingResponse:
    descriptor = normalize_recommendation_request(await _read_json(request))
    chunks = stream_recommendations(descriptor, transport)

    # Pull the first chunk here so that upstream failures that happen before
    # any output still get a proper status code.
    try:
        first_chunk = await anext(chunks)
    except StopAsyncIteration:
        await chunks.aclose()
        raise ResolutionError("Model returned an empty stream", error="Failed to generate recommendations")
    except UpstreamError as e:
        await chunks.aclose()
        logger.error(f"Recommendation stream failed before first chunk: {e.message}")
        raise _relabel(e, "Failed to generate recommendations") from e

    return StreamingResponse(
        _relay(first_chunk, chunks),
        media_type="text/plain; charset=utf-8",
    )


async def _relay(first_chunk: str, chunks: AsyncIterator[str]) -> AsyncIterator[str]:
    """Forward chunks unchanged and in order; close upstream when done or abandoned."""
    async with aclosing(chunks):
        yield first_chunk
        try:
            async for chunk in chunks:
                yield chunk
        except UpstreamError as e:
            logger.error(f"Recommendation stream aborted mid-response: {e.message}")
            raise


@router.post(
    "/expand-interests",
    response_model=InterestExpansionResponse,
    responses=ERROR_RESPONSES,
    status_code=200,
    summary="Suggest related interests",
    description="""
    Suggests up to `count` (default 5) interests related to the ones given,
    optionally tailored to a place the user is visiting.
    """,
    openapi_extra=_body_schema(InterestExpansionRequest),
)
async def expand_interests_endpoint(
    request: Request,
    transport: GenerationTransport = Depends(get_buffered_transport),
) -> InterestExpansionResponse:
    descriptor = normalize_interest_request(await _read_json(request))

    try:
        interests = await expand_interests(descriptor, transport)
    except UpstreamError as e:
        logger.error(f"Interest expansion failed: {e.message}")
        raise _relabel(e, "Failed to expand interests") from e

    return InterestExpansionResponse(interests=interests)


@router.post(
    "/query",
    response_model=QueryResponse,
    responses=ERROR_RESPONSES,
    status_code=200,
    summary="Ask about places",
    description="Answers a natural-language question about places, using location and interests as context.",
    openapi_extra=_body_schema(QueryRequest),
)
async def query_endpoint(
    request: Request,
    transport: GenerationTransport = Depends(get_buffered_transport),
) -> QueryResponse:
    descriptor = normalize_query_request(await _read_json(request))

    try:
        answer = await answer_query(descriptor, transport)
    except UpstreamError as e:
        logger.error(f"Query answering failed: {e.message}")
        raise _relabel(e, "Failed to process query") from e

    return QueryResponse(response=answer)
