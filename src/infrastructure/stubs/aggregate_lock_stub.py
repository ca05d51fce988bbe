"""In-process implementation of AggregateLockProtocol.

One asyncio.Lock per aggregate id, created on first use. Only valid
within a single event loop and process; a multi-process deployment
needs a database-backed lock instead.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from src.application.ports.aggregate_lock import AggregateLockProtocol


class AggregateLockStub(AggregateLockProtocol):
    """Per-aggregate asyncio locks."""

    def __init__(self) -> None:
        self._locks: dict[UUID, asyncio.Lock] = {}

    @asynccontextmanager
    async def hold(self, aggregate_id: UUID) -> AsyncIterator[None]:
        """Hold the lock of an aggregate for the duration of a block."""
        lock = self._locks.setdefault(aggregate_id, asyncio.Lock())
        async with lock:
            yield

    def is_held(self, aggregate_id: UUID) -> bool:
        """Whether the aggregate's lock is currently held."""
        lock = self._locks.get(aggregate_id)
        return lock is not None and lock.locked()
