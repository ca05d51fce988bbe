"""Health check response models."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: Health status string (e.g., "healthy").
        version: Running service version.
        environment: Deployment environment name.
    """

    status: str
    version: str
    environment: str
