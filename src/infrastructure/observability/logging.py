"""Structured logging configuration with structlog.

Production renders one JSON object per line; any other environment uses
the console renderer. The level comes from LOG_LEVEL unless given
explicitly.

Log Entry Format (production):
    {
        "timestamp": "2025-03-04T13:00:00.000000Z",
        "level": "info",
        "event": "vote_recorded",
        "correlation_id": "0195...",
        "service": "VoteRecorderService",
        "component": "adjudication",
        "operation": "record_vote",
        ...operation context
    }
"""

import logging
import os
from typing import cast

import structlog
from structlog.typing import Processor

from src.infrastructure.observability.correlation import correlation_id_processor

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
PRODUCTION = "production"


def resolve_log_level(level_name: str | None = None) -> int:
    """Translate a level name (or LOG_LEVEL) into a logging level.

    Unknown names fall back to INFO.
    """
    name = (level_name or os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_structlog(
    environment: str = PRODUCTION,
    log_level: str | None = None,
) -> None:
    """Configure structlog once at startup.

    Args:
        environment: "production" for JSON, anything else for console output.
        log_level: Level name overriding LOG_LEVEL.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
    ]
    if environment == PRODUCTION:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(resolve_log_level(log_level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
