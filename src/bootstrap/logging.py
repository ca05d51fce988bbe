"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

from src.config.adjudication_config import AdjudicationConfig
from src.infrastructure.observability import configure_structlog


def configure_logging_for(config: AdjudicationConfig, log_level: str | None = None) -> None:
    """Configure structlog for the environment named in config.

    Production renders JSON; every other environment renders to console.
    """
    configure_structlog(environment=config.environment, log_level=log_level)


__all__ = ["configure_logging_for"]
