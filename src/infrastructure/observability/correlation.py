"""Request correlation ids.

Every request handled by the core carries a correlation id, read from
the X-Correlation-ID header or generated on arrival. It lives in a
contextvar so it follows the request across awaits, and a structlog
processor stamps it on every log entry.

Usage:
    token = set_correlation_id(request.headers.get(CORRELATION_ID_HEADER) or generate_correlation_id())
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from contextvars import ContextVar, Token
from typing import Any

from uuid6 import uuid7

CORRELATION_ID_HEADER = "X-Correlation-ID"

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """Generate a new time-ordered correlation id."""
    return str(uuid7())


def get_correlation_id() -> str:
    """Current correlation id, or "" outside a request."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> Token[str]:
    """Set the correlation id for the current context.

    Args:
        correlation_id: The id to propagate.

    Returns:
        Token to restore the previous value with reset_correlation_id().
    """
    return _correlation_id.set(correlation_id)


def reset_correlation_id(token: Token[str]) -> None:
    """Restore the correlation id that was current before set_correlation_id()."""
    _correlation_id.reset(token)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding correlation_id when one is set.

    An id already bound on the logger wins over the contextvar.
    """
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict
