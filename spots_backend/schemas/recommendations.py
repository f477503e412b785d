"""
Pydantic schemas for the AI recommendation endpoints.

These models define the strict request/response contracts for the
recommendation pipeline powered by Gemini. Request models are applied by the
input normalizer (spots_backend/services/query_normalizer.py) rather than by
FastAPI directly, so that schema failures surface as 400 responses with
field-level diagnostics.
"""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

# ============================================================================
# REQUEST MODELS
# ============================================================================

class GeoLocation(BaseModel):
    """A WGS84 coordinate pair sent by the map view."""
    latitude: float = Field(..., examples=[34.0522])
    longitude: float = Field(..., examples=[-118.2437])


class RecommendationRequest(BaseModel):
    """
    Request for place recommendations.

    Either `query` or a non-empty `interests` list must be provided. That rule
    is checked by the normalizer after this schema validates.
    """
    query: Optional[str] = Field(
        None,
        description="Free-text description of what the user is looking for",
        examples=["quiet coffee shop to work from"]
    )
    interests: Optional[List[str]] = Field(
        None,
        description="User interests, in the order the user picked them",
        examples=[["coffee", "photography"]]
    )
    location: Optional[GeoLocation] = None
    radius: Optional[float] = Field(
        None,
        description="Search radius in kilometers",
        gt=0,
        examples=[5]
    )
    type: Optional[str] = Field(
        None,
        description="Restrict results to this kind of place",
        examples=["cafe", "museum"]
    )
    limit: int = Field(
        5,
        description="Maximum number of recommendations",
        ge=1
    )


class InterestExpansionRequest(BaseModel):
    """Request to suggest interests related to the ones a user already has."""
    interests: List[str] = Field(
        ...,
        description="Interests the user already selected",
        examples=[["hiking", "coffee"]]
    )
    location: Optional[str] = Field(
        None,
        description="Name of the place the user is visiting",
        examples=["Los Angeles"]
    )
    count: int = Field(
        5,
        description="Maximum number of interests to return",
        ge=1
    )


class QueryRequest(BaseModel):
    """Natural-language question about places, answered conversationally."""
    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(..., min_length=1)
    location: Optional[GeoLocation] = None
    user_interests: Optional[List[str]] = Field(None, alias="userInterests")


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class PlaceRecommendation(BaseModel):
    """A single structured place suggestion."""
    name: str
    description: str
    tags: List[str] = Field(default_factory=list)
    rating: Optional[float] = Field(None, ge=0, le=5)
    address: Optional[str] = None


class RecommendationSet(BaseModel):
    """
    Recommendation payload shared by live and degraded responses.

    - kind="structured": `items` holds place suggestions, `narrative` is null
    - kind="narrative": `narrative` holds the model's prose, `items` is empty

    Both kinds serialize with the same field names and types.
    """
    kind: Literal["structured", "narrative"]
    items: List[PlaceRecommendation] = Field(default_factory=list)
    narrative: Optional[str] = None


class RecommendationResponse(BaseModel):
    """Response for POST /api/ai/recommendations."""
    recommendations: RecommendationSet


class InterestExpansionResponse(BaseModel):
    """Response for POST /api/ai/expand-interests."""
    interests: List[str]


class QueryResponse(BaseModel):
    """Response for POST /api/ai/query."""
    response: str


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing endpoint."""
    error: str
    details: Optional[Any] = None
