"""Case repository port.

Stores cases. Case numbers are unique per year; a store that detects a
duplicate number raises SequenceConflictError so the service can retry
with a fresh number.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.case import Case, CaseStatus
from src.domain.models.sequence_number import SequenceNumber


class CaseRepositoryProtocol(Protocol):
    """Protocol for case storage operations."""

    async def add(self, case: Case) -> None:
        """Store a new case.

        Raises:
            SequenceConflictError: If the case number is already taken.
        """
        ...

    async def update(self, case: Case) -> None:
        """Replace a stored case.

        Raises:
            NotFoundError: If the case does not exist.
        """
        ...

    async def get(self, case_id: UUID) -> Case | None:
        """Retrieve a case by ID."""
        ...

    async def get_by_number(self, number: SequenceNumber) -> Case | None:
        """Retrieve a case by its yearly number."""
        ...

    async def list_cases(self, status: CaseStatus | None = None) -> list[Case]:
        """List cases ordered by number, optionally filtered by status."""
        ...
