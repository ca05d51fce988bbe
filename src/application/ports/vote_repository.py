"""Vote repository port.

The store enforces uniqueness of (session_case_id, member_id).
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.vote import Vote


class VoteRepositoryProtocol(Protocol):
    """Protocol for vote storage operations."""

    async def add(self, vote: Vote) -> None:
        """Store a new vote.

        Raises:
            DuplicateVoteError: If the member already voted on the appearance.
        """
        ...

    async def update(self, vote: Vote) -> None:
        """Replace a stored vote.

        Raises:
            NotFoundError: If the vote does not exist.
        """
        ...

    async def get(self, vote_id: UUID) -> Vote | None:
        """Retrieve a vote by ID."""
        ...

    async def get_by_member(self, session_case_id: UUID, member_id: UUID) -> Vote | None:
        """Retrieve a member's vote on a case appearance."""
        ...

    async def list_for_session_case(self, session_case_id: UUID) -> list[Vote]:
        """List the votes on a case appearance, oldest first."""
        ...

    async def count_for_session_case(self, session_case_id: UUID) -> int:
        """Count the votes on a case appearance."""
        ...

    async def delete(self, vote_id: UUID) -> None:
        """Remove a vote."""
        ...
