"""Decision repository port.

Decision numbers are unique per year. Publications are appended with a
compare-and-append: the store accepts a decision carrying a new
publication only if the stored decision still expects that order.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.decision import DecisionDocument, DecisionStatus
from src.domain.models.sequence_number import SequenceNumber


class DecisionRepositoryProtocol(Protocol):
    """Protocol for decision document storage operations."""

    async def add(self, decision: DecisionDocument) -> None:
        """Store a new decision.

        Raises:
            SequenceConflictError: If the decision number is already taken.
            DecisionAlreadyExistsError: If the case already has a decision.
        """
        ...

    async def update(self, decision: DecisionDocument) -> None:
        """Replace a stored decision without touching its publications.

        Raises:
            NotFoundError: If the decision does not exist.
        """
        ...

    async def append_publication(
        self,
        decision: DecisionDocument,
        expected_order: int,
    ) -> None:
        """Store a decision whose last publication has expected_order.

        Raises:
            NotFoundError: If the decision does not exist.
            SequenceConflictError: If another publication took that order first.
        """
        ...

    async def get(self, decision_id: UUID) -> DecisionDocument | None:
        """Retrieve a decision by ID."""
        ...

    async def get_by_case(self, case_id: UUID) -> DecisionDocument | None:
        """Retrieve the decision of a case."""
        ...

    async def get_by_number(self, number: SequenceNumber) -> DecisionDocument | None:
        """Retrieve a decision by its yearly number."""
        ...

    async def list_decisions(
        self, status: DecisionStatus | None = None
    ) -> list[DecisionDocument]:
        """List decisions ordered by number, optionally filtered by status."""
        ...

    async def delete(self, decision_id: UUID) -> None:
        """Remove a decision."""
        ...
