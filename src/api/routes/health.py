"""Health check endpoint for the adjudication API."""

from fastapi import APIRouter, Depends

from src import __version__
from src.api.dependencies.adjudication import get_container
from src.api.models.health import HealthResponse
from src.bootstrap.adjudication import AdjudicationContainer

router = APIRouter(prefix="/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    container: AdjudicationContainer = Depends(get_container),
) -> HealthResponse:
    """Return health status.

    Returns:
        Health status with 200 OK.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=container.config.environment,
    )
