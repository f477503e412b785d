"""
Schemas for scheduler-triggered refresh endpoints.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_timestamp() -> str:
    """Current time as an ISO-8601 string in UTC."""
    return datetime.now(timezone.utc).isoformat()


class RefreshOutcome(BaseModel):
    """
    Result of one cache refresh.

    Produced exactly once per refresh call by the cache that owns the data.
    """
    model_config = ConfigDict(frozen=True)

    success: bool
    count: Optional[int] = Field(None, ge=0, description="Number of entries written")
    timestamp: str = Field(default_factory=utc_timestamp)
    error: Optional[str] = None


class RefreshResponse(BaseModel):
    """Response for GET /api/cron/refresh-trending (None fields are omitted)."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    count: Optional[int] = None
    timestamp: str
    error: Optional[str] = None
    request_id: Optional[str] = Field(None, serialization_alias="requestId")

    @classmethod
    def from_outcome(cls, outcome: RefreshOutcome, request_id: Optional[str]) -> "RefreshResponse":
        return cls(**outcome.model_dump(), request_id=request_id)
