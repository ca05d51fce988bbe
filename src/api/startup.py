"""Startup hooks for the adjudication API.

This module provides startup hooks that:
1. Configure structured logging
2. Validate the adjudication configuration before serving requests
3. Build the adjudication container

Usage in FastAPI:
    @asynccontextmanager
    async def lifespan(app):
        configure_logging()
        config = validate_configuration_at_startup()
        initialize_adjudication(config)
        yield
"""

from structlog import get_logger

from src.bootstrap.adjudication import (
    build_adjudication_container,
    set_adjudication_container,
)
from src.bootstrap.logging import configure_logging_for
from src.config.adjudication_config import AdjudicationConfig

logger = get_logger()


def configure_logging() -> None:
    """Configure structured logging for the application.

    This function configures structlog based on the ENVIRONMENT variable:
    - production: JSON output for log aggregation
    - development (default): Colored console output

    Should be called first in the startup sequence, before any logging occurs.
    """
    config = AdjudicationConfig.from_environment()
    configure_logging_for(config)

    log = get_logger().bind(component="startup_logging")
    log.info("structured_logging_configured", environment=config.environment)


def validate_configuration_at_startup() -> AdjudicationConfig:
    """Load and validate the adjudication configuration.

    Returns:
        The validated configuration.

    Raises:
        ValueError: If a configured value is out of range.
    """
    log = logger.bind(component="configuration_validation")
    log.info("configuration_validation_started")
    try:
        config = AdjudicationConfig.from_environment()
    except ValueError as e:
        log.critical("configuration_validation_failed", error=str(e))
        raise

    log.info(
        "configuration_validation_passed",
        environment=config.environment,
        sequence_max_retries=config.sequence_max_retries,
        authority_name_fallback=config.authority_name_fallback,
        notification_default_deadline_days=config.notification_default_deadline_days,
    )
    return config


def initialize_adjudication(config: AdjudicationConfig) -> None:
    """Build the adjudication container and install it process-wide."""
    set_adjudication_container(build_adjudication_container(config))
    logger.bind(component="startup").info("adjudication_initialized")
