"""Shared service helpers: structured logging mixin, sequence retry and
the session-then-appearance lock order.

Usage:
    class MyService(LoggingMixin):
        def __init__(self, repository: SomePort) -> None:
            self._repository = repository
            self._init_logger()

        async def do_something(self, item_id: UUID) -> None:
            log = self._log_operation("do_something", item_id=str(item_id))
            log.info("something_started")
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import TypeVar
from uuid import UUID

import structlog

from src.application.ports.aggregate_lock import AggregateLockProtocol
from src.application.ports.session_repository import SessionRepositoryProtocol
from src.domain.errors.not_found import NotFoundError
from src.domain.errors.sequence import SequenceConflictError
from src.infrastructure.observability.correlation import get_correlation_id

T = TypeVar("T")

DEFAULT_COMPONENT = "adjudication"


class LoggingMixin:
    """Mixin providing structured logging for services.

    The logger is bound with the service class name and a component.
    Each operation additionally binds its name, the request correlation
    id and any context passed to _log_operation().

    Attributes:
        _log: The structlog BoundLogger for this service instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = DEFAULT_COMPONENT) -> None:
        """Bind the service logger. Call at the end of __init__."""
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Create an operation-scoped logger.

        Args:
            operation: Name of the operation being performed.
            **context: Additional context to bind to the logger.

        Returns:
            BoundLogger with operation and correlation context.
        """
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )


async def retry_on_sequence_conflict(
    attempt: Callable[[], Awaitable[T]],
    max_retries: int,
    log: structlog.BoundLogger,
) -> T:
    """Run attempt, retrying it when it loses a numbering race.

    Each retry calls attempt again from scratch, so it allocates a fresh
    number. After max_retries retries the conflict is surfaced.

    Args:
        attempt: Coroutine factory performing allocate-and-save.
        max_retries: Retries after the first attempt.
        log: Operation logger.

    Returns:
        Whatever attempt returns.

    Raises:
        SequenceConflictError: If every attempt collided.
    """
    retries = 0
    while True:
        try:
            return await attempt()
        except SequenceConflictError as exc:
            if retries >= max_retries:
                log.warning(
                    "sequence_conflict_surfaced",
                    scope=exc.scope,
                    sequence=exc.sequence,
                    retries=retries,
                )
                raise
            retries += 1
            log.info(
                "sequence_conflict_retrying",
                scope=exc.scope,
                sequence=exc.sequence,
                retry=retries,
            )


@asynccontextmanager
async def hold_appearance(
    lock: AggregateLockProtocol,
    sessions: SessionRepositoryProtocol,
    session_case_id: UUID,
) -> AsyncIterator[None]:
    """Hold the session lock, then the case appearance lock.

    Attendance changes and session transitions hold only the session
    lock, so anything checked under both locks cannot be invalidated by
    them. Locks are always taken session first.

    Raises:
        NotFoundError: Unknown appearance.
    """
    session_case = await sessions.get_session_case(session_case_id)
    if session_case is None:
        raise NotFoundError("session case", session_case_id)
    async with lock.hold(session_case.session_id), lock.hold(session_case_id):
        yield
