"""
Input normalizer for the AI endpoints.

Turns an untyped request body (whatever json.loads produced) into a
QueryDescriptor. Schema validation is delegated to the Pydantic request
models; the "query or interests" rule is layered on top and only checked
once the schema has validated.
"""

import logging
from typing import Any, Iterable, List, Optional, Tuple, Type, TypeVar

import pydantic
from pydantic import BaseModel

from spots_backend.agents.recommendation.types import GeoPoint, QueryDescriptor
from spots_backend.schemas.recommendations import (
    GeoLocation,
    InterestExpansionRequest,
    QueryRequest,
    RecommendationRequest,
)
from spots_backend.utils.errors import ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

MISSING_QUERY_OR_INTERESTS = "Either query or interests must be provided"


def _parse(model: Type[ModelT], body: Any) -> ModelT:
    """Validate body against model, mapping failures to ValidationError."""
    if not isinstance(body, dict):
        raise ValidationError(
            "Request body must be a JSON object",
            details=[{"loc": ["body"], "msg": "Expected a JSON object", "type": "dict_type"}],
        )
    try:
        return model.model_validate(body)
    except pydantic.ValidationError as e:
        details = [
            {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in e.errors()
        ]
        logger.info(f"{model.__name__} rejected: {len(details)} field error(s)")
        raise ValidationError("Request body failed validation", details=details) from e


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _clean_interests(values: Optional[Iterable[str]]) -> Tuple[str, ...]:
    if not values:
        return ()
    cleaned: List[str] = []
    for value in values:
        value = value.strip()
        if value:
            cleaned.append(value)
    return tuple(cleaned)


def _geo_point(location: Optional[GeoLocation]) -> Optional[GeoPoint]:
    if location is None:
        return None
    return GeoPoint(latitude=location.latitude, longitude=location.longitude)


def _require_query_or_interests(descriptor: QueryDescriptor) -> QueryDescriptor:
    if not descriptor.free_text_query and not descriptor.interests:
        raise ValidationError(
            MISSING_QUERY_OR_INTERESTS,
            details=MISSING_QUERY_OR_INTERESTS,
            error=MISSING_QUERY_OR_INTERESTS,
        )
    return descriptor


def normalize_recommendation_request(body: Any) -> QueryDescriptor:
    """
    Normalize a POST /api/ai/recommendations body.

    Raises:
        ValidationError: Schema failure, or neither query nor interests given
    """
    request = _parse(RecommendationRequest, body)
    location = _geo_point(request.location)
    descriptor = QueryDescriptor(
        free_text_query=_clean_text(request.query),
        interests=_clean_interests(request.interests),
        location=location,
        # A radius without a center cannot be expressed in the prompt
        radius_km=request.radius if location is not None else None,
        place_type=_clean_text(request.type),
        result_limit=request.limit,
    )
    return _require_query_or_interests(descriptor)


def normalize_interest_request(body: Any) -> QueryDescriptor:
    """
    Normalize a POST /api/ai/expand-interests body.

    Raises:
        ValidationError: Schema failure, or no non-blank interest given
    """
    request = _parse(InterestExpansionRequest, body)
    descriptor = QueryDescriptor(
        interests=_clean_interests(request.interests),
        location_name=_clean_text(request.location),
        result_limit=request.count,
    )
    return _require_query_or_interests(descriptor)


def normalize_query_request(body: Any) -> QueryDescriptor:
    """
    Normalize a POST /api/ai/query body.

    Raises:
        ValidationError: Schema failure, or a blank query
    """
    request = _parse(QueryRequest, body)
    descriptor = QueryDescriptor(
        free_text_query=_clean_text(request.query),
        interests=_clean_interests(request.user_interests),
        location=_geo_point(request.location),
    )
    if descriptor.free_text_query is None:
        raise ValidationError(
            "Query must not be blank",
            details=[{"loc": ["query"], "msg": "Query must not be blank", "type": "value_error"}],
        )
    return descriptor
