"""In-memory stub for DecisionRepositoryProtocol.

Simulates:
- unique yearly decision number
- one decision per case
- compare-and-append of publications on the stored publication count
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from uuid import UUID

from src.application.ports.decision_repository import DecisionRepositoryProtocol
from src.domain.errors import (
    DecisionAlreadyExistsError,
    NotFoundError,
    SequenceConflictError,
)
from src.domain.models.decision import DecisionDocument, DecisionStatus
from src.domain.models.sequence_number import SequenceNumber, SequenceScope


class DecisionRepositoryStub(DecisionRepositoryProtocol):
    """In-memory stub implementation of DecisionRepositoryProtocol.

    Attributes:
        _decisions: Dictionary mapping decision.id to DecisionDocument.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._decisions: dict[UUID, DecisionDocument] = {}
        self._lock = asyncio.Lock()

    async def add(self, decision: DecisionDocument) -> None:
        """Store a new decision, enforcing unique number and case."""
        async with self._lock:
            for existing in self._decisions.values():
                if existing.number == decision.number:
                    raise SequenceConflictError(
                        SequenceScope.DECISION.value,
                        decision.number.sequence,
                        decision.number.year,
                    )
                if existing.case_id == decision.case_id:
                    raise DecisionAlreadyExistsError(
                        decision.case_id, str(existing.number)
                    )
            self._decisions[decision.id] = decision

    async def update(self, decision: DecisionDocument) -> None:
        """Replace a decision, keeping the stored publication history."""
        async with self._lock:
            stored = self._decisions.get(decision.id)
            if stored is None:
                raise NotFoundError("decision", decision.id)
            self._decisions[decision.id] = replace(
                decision, publications=stored.publications
            )

    async def append_publication(
        self,
        decision: DecisionDocument,
        expected_order: int,
    ) -> None:
        """Store a decision whose last publication takes expected_order."""
        async with self._lock:
            stored = self._decisions.get(decision.id)
            if stored is None:
                raise NotFoundError("decision", decision.id)
            if (
                stored.next_publication_order != expected_order
                or len(decision.publications) != expected_order
            ):
                raise SequenceConflictError("publication", expected_order)
            self._decisions[decision.id] = decision

    async def get(self, decision_id: UUID) -> DecisionDocument | None:
        """Retrieve a decision by ID."""
        return self._decisions.get(decision_id)

    async def get_by_case(self, case_id: UUID) -> DecisionDocument | None:
        """Retrieve the decision of a case."""
        return next(
            (d for d in self._decisions.values() if d.case_id == case_id), None
        )

    async def get_by_number(self, number: SequenceNumber) -> DecisionDocument | None:
        """Retrieve a decision by its yearly number."""
        return next(
            (d for d in self._decisions.values() if d.number == number), None
        )

    async def list_decisions(
        self, status: DecisionStatus | None = None
    ) -> list[DecisionDocument]:
        """List decisions ordered by number."""
        decisions = [
            d for d in self._decisions.values() if status is None or d.status is status
        ]
        return sorted(decisions, key=lambda d: d.number)

    async def delete(self, decision_id: UUID) -> None:
        """Remove a decision."""
        async with self._lock:
            self._decisions.pop(decision_id, None)

    def clear(self) -> None:
        """Clear all stored decisions (for testing)."""
        self._decisions.clear()
