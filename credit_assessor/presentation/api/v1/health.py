"""Health check endpoint for service monitoring."""

from fastapi import APIRouter
from pydantic import BaseModel

from credit_assessor import __version__
from credit_assessor.service.scoring.settings import get_scoring_settings

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
    model_version: str


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Returns the health status of the service and the active scoring model.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        model_version=get_scoring_settings().model_version,
    )
