"""
Domain exceptions for the Spots recommendation pipeline.

Each exception carries the HTTP status and the stable `error` label that the
application-level handlers in spots_backend/main.py put in the response
envelope:

    {"error": "<label>", "details": <message or field diagnostics>}
"""

from typing import Any, Optional


class PipelineError(Exception):
    """Base class for errors translated into a JSON error envelope."""

    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, message: str, details: Optional[Any] = None, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details if details is not None else message
        if error is not None:
            self.error = error

    def to_response(self) -> dict:
        """Body of the JSON error response."""
        return {"error": self.error, "details": self.details}


class ValidationError(PipelineError):
    """Malformed or semantically incomplete request (always a client error)."""

    status_code = 400
    error = "Invalid request"


class UpstreamError(PipelineError):
    """LLM provider transport, auth, rate or timeout failure."""

    status_code = 500
    error = "Upstream provider error"


class ResolutionError(PipelineError):
    """Model output could not be coerced into any usable shape."""

    status_code = 500
    error = "Could not interpret model output"


class AuthorizationError(PipelineError):
    """Shared-secret check failed for a scheduler-triggered endpoint."""

    status_code = 401
    error = "Unauthorized"
