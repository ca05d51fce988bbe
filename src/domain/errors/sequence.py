"""Sequence-number collision error.

Sequence numbers (case, session, decision, notification list,
publication order) are allocated with an atomic read-max-then-increment.
When a store still reports a collision, this error is raised; services
retry it a small fixed number of times and then surface it.
"""

from __future__ import annotations

from src.domain.exceptions import AdjudicationError


class SequenceConflictError(AdjudicationError):
    """Raised when a sequence number is already taken.

    Attributes:
        scope: Sequence scope (e.g. "decision", "publication").
        sequence: The colliding sequence value.
        year: Year partition of the sequence, when scoped by year.
    """

    def __init__(self, scope: str, sequence: int, year: int | None = None) -> None:
        self.scope = scope
        self.sequence = sequence
        self.year = year
        where = f"{sequence}/{year}" if year is not None else str(sequence)
        super().__init__(
            f"Concurrent {scope} numbering collision on {where}; "
            "the number was taken by another request"
        )
