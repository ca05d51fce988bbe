"""In-memory stub for SequenceAllocatorProtocol.

Keeps a high-water mark per (scope, year) behind an asyncio.Lock, so
concurrent callers receive distinct, increasing values and deleted
entities never give their numbers back.
"""

from __future__ import annotations

import asyncio

from src.application.ports.sequence_allocator import SequenceAllocatorProtocol
from src.domain.models.sequence_number import SequenceScope


class SequenceAllocatorStub(SequenceAllocatorProtocol):
    """In-memory year-scoped sequence allocator.

    Attributes:
        _high_water: Highest value handed out per (scope, year).
    """

    def __init__(self) -> None:
        """Initialize with no allocations."""
        self._high_water: dict[tuple[SequenceScope, int], int] = {}
        self._lock = asyncio.Lock()

    async def next_value(self, scope: SequenceScope, year: int) -> int:
        """Allocate the next value for (scope, year), starting at 1."""
        async with self._lock:
            value = self._high_water.get((scope, year), 0) + 1
            self._high_water[(scope, year)] = value
            return value

    async def peek(self, scope: SequenceScope, year: int) -> int:
        """Return the highest value allocated so far (0 when none)."""
        return self._high_water.get((scope, year), 0)

    def seed(self, scope: SequenceScope, year: int, value: int) -> None:
        """Set the high-water mark directly.

        Lets tests start a year at an arbitrary number or force a
        collision with an already stored entity.
        """
        self._high_water[(scope, year)] = value

    def clear(self) -> None:
        """Forget every allocation (for testing)."""
        self._high_water.clear()
