"""In-memory stub for CaseRepositoryProtocol.

Simulates the unique constraint on the yearly case number so that the
registry's retry path can be exercised without a database.
"""

from __future__ import annotations

import asyncio
from uuid import UUID

from src.application.ports.case_repository import CaseRepositoryProtocol
from src.domain.errors import NotFoundError, SequenceConflictError
from src.domain.models.case import Case, CaseStatus
from src.domain.models.sequence_number import SequenceNumber, SequenceScope


class CaseRepositoryStub(CaseRepositoryProtocol):
    """In-memory stub implementation of CaseRepositoryProtocol.

    Attributes:
        _cases: Dictionary mapping case.id to Case.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._cases: dict[UUID, Case] = {}
        self._lock = asyncio.Lock()

    async def add(self, case: Case) -> None:
        """Store a new case, enforcing a unique number."""
        async with self._lock:
            if any(c.number == case.number for c in self._cases.values()):
                raise SequenceConflictError(
                    SequenceScope.CASE.value, case.number.sequence, case.number.year
                )
            self._cases[case.id] = case

    async def update(self, case: Case) -> None:
        """Replace a stored case."""
        async with self._lock:
            if case.id not in self._cases:
                raise NotFoundError("case", case.id)
            self._cases[case.id] = case

    async def get(self, case_id: UUID) -> Case | None:
        """Retrieve a case by ID."""
        return self._cases.get(case_id)

    async def get_by_number(self, number: SequenceNumber) -> Case | None:
        """Retrieve a case by its yearly number."""
        return next((c for c in self._cases.values() if c.number == number), None)

    async def list_cases(self, status: CaseStatus | None = None) -> list[Case]:
        """List cases ordered by number."""
        cases = [c for c in self._cases.values() if status is None or c.status is status]
        return sorted(cases, key=lambda c: c.number)

    def clear(self) -> None:
        """Clear all stored cases (for testing)."""
        self._cases.clear()
