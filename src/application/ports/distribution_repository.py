"""Distribution repository port (one distribution per case appearance)."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.distribution import Distribution


class DistributionRepositoryProtocol(Protocol):
    """Protocol for distribution storage operations."""

    async def save(self, distribution: Distribution) -> None:
        """Create or replace the distribution of its case appearance."""
        ...

    async def get(self, session_case_id: UUID) -> Distribution | None:
        """Retrieve the distribution of a case appearance."""
        ...

    async def delete(self, session_case_id: UUID) -> None:
        """Remove the distribution of a case appearance, if any."""
        ...
