"""
Credit Assessor - Main Application Entry Point

An AI-assisted credit scoring and decisioning service that evaluates
business credit applications using traditional and alternative data.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from credit_assessor import __version__
from credit_assessor.core.config import settings
from credit_assessor.core.logging import setup_logging
from credit_assessor.core.metrics import get_metrics, get_metrics_content_type
from credit_assessor.presentation.api import api_router
from credit_assessor.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)
from credit_assessor.service.scoring.settings import get_scoring_settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Set up logging
    - Load and validate the scoring policy
    """
    setup_logging()

    scoring = get_scoring_settings()
    logger = structlog.get_logger(__name__)
    logger.info(
        "application_started",
        version=__version__,
        model_version=scoring.model_version,
        auto_approve_threshold=scoring.auto_approve_threshold,
        auto_decline_threshold=scoring.auto_decline_threshold,
    )

    yield

    logger.info("application_stopped")


app = FastAPI(
    title="Credit Assessor",
    description="AI-assisted credit scoring and decisioning service",
    version=__version__,
    debug=settings.debug,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

error_handler_middleware(app)

app.include_router(api_router)


@app.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    if not settings.metrics_enabled:
        return Response(status_code=404)
    return Response(
        content=get_metrics(),
        media_type=get_metrics_content_type(),
    )


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""

    return RedirectResponse(url="/docs")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "credit_assessor.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
