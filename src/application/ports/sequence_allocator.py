"""Sequence allocator port.

Contract: allocation is an atomic read-max-then-increment scoped by
(scope, year). Values are never handed out twice, even when the entity
that received one is later deleted (high-water mark).

Production Implementation:
- A counter row per (scope, year) updated with
  UPDATE ... SET value = value + 1 RETURNING value
- Or SELECT ... FOR UPDATE on the counter row
"""

from __future__ import annotations

from typing import Protocol

from src.domain.models.sequence_number import SequenceScope


class SequenceAllocatorProtocol(Protocol):
    """Protocol for year-scoped sequence allocation."""

    async def next_value(self, scope: SequenceScope, year: int) -> int:
        """Allocate the next sequence value for (scope, year).

        Returns:
            A value greater than every value previously allocated for
            the same (scope, year), starting at 1.
        """
        ...

    async def peek(self, scope: SequenceScope, year: int) -> int:
        """Return the highest value allocated so far (0 when none)."""
        ...
