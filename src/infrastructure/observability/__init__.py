"""Observability infrastructure: structured logging and correlation ids.

Usage:
    from src.infrastructure.observability import configure_structlog

    configure_structlog(environment="production")
"""

from src.infrastructure.observability.correlation import (
    CORRELATION_ID_HEADER,
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from src.infrastructure.observability.logging import (
    configure_structlog,
    resolve_log_level,
)

__all__: list[str] = [
    "CORRELATION_ID_HEADER",
    "configure_structlog",
    "correlation_id_processor",
    "generate_correlation_id",
    "get_correlation_id",
    "reset_correlation_id",
    "resolve_log_level",
    "set_correlation_id",
]
