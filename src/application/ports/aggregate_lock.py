"""Aggregate lock port.

Distribution and vote mutation, and judgment confirmation, read state,
check invariants and then write. The whole check-then-write sequence
runs while holding the lock of the case appearance it touches, so two
concurrent requests cannot both pass a check that only one may pass.

Attendance changes and session transitions hold the session lock, and
appearance mutations hold it too, always before the appearance lock.
Decision emission holds the case lock.

Production Implementation:
- SELECT ... FOR UPDATE on the session_case row
- Or a PostgreSQL advisory lock keyed by the session case id
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Protocol
from uuid import UUID


class AggregateLockProtocol(Protocol):
    """Protocol for per-aggregate mutual exclusion."""

    def hold(self, aggregate_id: UUID) -> AbstractAsyncContextManager[None]:
        """Hold the lock of an aggregate for the duration of a block.

        Example:
            async with lock.hold(session_case_id):
                ...
        """
        ...
