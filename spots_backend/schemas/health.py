"""
Health check endpoint schemas.

The health endpoint is PUBLIC (no authentication required) and returns
a simple status indicator plus the generation mode.
"""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Response model for GET /health endpoint.

    `mode` is "degraded" when no live Gemini key is configured and every AI
    endpoint serves deterministic mock data.
    """

    status: str = Field(
        default="ok",
        description="Health status of the API (always 'ok' if responding)",
        examples=["ok"]
    )
    mode: Literal["live", "degraded"] = Field(
        ...,
        description="Whether AI endpoints call the provider or serve mock data",
        examples=["degraded"]
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "example": {
                "status": "ok",
                "mode": "live"
            }
        }
