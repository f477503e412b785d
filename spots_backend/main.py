"""
FastAPI application entry point for the Spots backend.

This module creates the FastAPI app instance, registers all routers and
installs the exception handlers that turn every failure into a JSON
envelope:

    {"error": "<stable label>", "details": <diagnostics>}
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from spots_backend.config import settings
from spots_backend.routes.ai import router as ai_router
from spots_backend.routes.cities import router as cities_router
from spots_backend.routes.cron import router as cron_router
from spots_backend.routes.health import router as health_router
from spots_backend.services.degraded_mode import is_degraded_mode
from spots_backend.utils.errors import PipelineError

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    Environment-based configuration:
    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS env var (required)
    - ENVIRONMENT=testing/development: Allows all origins for local dev

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    environment = settings.ENVIRONMENT

    if settings.is_production():
        if settings.CORS_ALLOWED_ORIGINS:
            logger.info(
                f"CORS configured for production with {len(settings.CORS_ALLOWED_ORIGINS)} allowed origins"
            )
            return settings.CORS_ALLOWED_ORIGINS
        logger.warning(
            "CORS_ALLOWED_ORIGINS not set in production. "
            "No web origins allowed. Set CORS_ALLOWED_ORIGINS for web clients."
        )
        return []

    logger.info(f"CORS configured for {environment}: allowing all origins")
    return ["*"]


# Create FastAPI app
app = FastAPI(
    title="Spots API",
    description="AI place recommendations, interest expansion and trending cities for the Spots app",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


@app.exception_handler(PipelineError)
async def pipeline_exception_handler(request: Request, exc: PipelineError):
    """Translate domain errors into their status code and error envelope."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(exc.to_response())
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Query/path parameter validation failures.

    Reported as 400 with the same envelope as body validation failures.
    """
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request",
            "details": jsonable_encoder(exc.errors()),
        }
    )


@app.exception_handler(Exception)
async def catch_all_handler(request: Request, exc: Exception):
    """Last resort: never leak a stack trace to the caller."""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "details": None},
    )


# Configure CORS with environment-based origins
cors_origins = _get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(ai_router)
app.include_router(cities_router)
app.include_router(cron_router)

if is_degraded_mode():
    logger.warning("No live GOOGLE_API_KEY configured: AI endpoints will serve mock data")

logger.info("FastAPI app initialized successfully")
