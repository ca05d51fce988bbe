"""In-memory stub for DistributionRepositoryProtocol."""

from __future__ import annotations

from uuid import UUID

from src.application.ports.distribution_repository import (
    DistributionRepositoryProtocol,
)
from src.domain.models.distribution import Distribution


class DistributionRepositoryStub(DistributionRepositoryProtocol):
    """In-memory distribution storage keyed by case appearance."""

    def __init__(self) -> None:
        self._distributions: dict[UUID, Distribution] = {}

    async def save(self, distribution: Distribution) -> None:
        self._distributions[distribution.session_case_id] = distribution

    async def get(self, session_case_id: UUID) -> Distribution | None:
        return self._distributions.get(session_case_id)

    async def delete(self, session_case_id: UUID) -> None:
        self._distributions.pop(session_case_id, None)

    def clear(self) -> None:
        """Clear all distributions (for testing)."""
        self._distributions.clear()
