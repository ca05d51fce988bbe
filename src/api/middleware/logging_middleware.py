"""Request logging middleware with correlation ids.

Every request gets a correlation id (taken from X-Correlation-ID or
generated), which is echoed back on the response and stamped on every
log entry written while the request is handled.

Requests answered with a problem document are logged at warning level
so rejected commands stand out from ordinary traffic; health probes
are logged at debug level.

Usage:
    from fastapi import FastAPI
    from src.api.middleware.logging_middleware import LoggingMiddleware

    app = FastAPI()
    app.add_middleware(LoggingMiddleware)
"""

import time
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.infrastructure.observability.correlation import (
    CORRELATION_ID_HEADER,
    generate_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)

QUIET_PATHS: frozenset[str] = frozenset({"/v1/health"})


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Correlation id propagation and one log line per finished request."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        correlation_id = (
            request.headers.get(CORRELATION_ID_HEADER) or generate_correlation_id()
        )
        token = set_correlation_id(correlation_id)
        log = structlog.get_logger().bind(
            method=request.method,
            path=request.url.path,
        )
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            log.exception(
                "request_failed",
                duration_ms=_elapsed_ms(started),
                error_type=type(exc).__name__,
            )
            raise
        finally:
            reset_correlation_id(token)

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        if request.url.path in QUIET_PATHS:
            emit = log.debug
        elif response.status_code >= 400:
            emit = log.warning
        else:
            emit = log.info
        emit(
            "request_completed",
            correlation_id=correlation_id,
            status_code=response.status_code,
            duration_ms=_elapsed_ms(started),
        )
        return response
