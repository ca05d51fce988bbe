"""In-memory stub for VoteRepositoryProtocol.

Simulates the unique constraint (session_case_id, member_id): a member
casts at most one vote per case appearance.
"""

from __future__ import annotations

import asyncio
from uuid import UUID

from src.application.ports.vote_repository import VoteRepositoryProtocol
from src.domain.errors import DuplicateVoteError, NotFoundError
from src.domain.models.vote import Vote


class VoteRepositoryStub(VoteRepositoryProtocol):
    """In-memory stub implementation of VoteRepositoryProtocol.

    Attributes:
        _votes: Dictionary mapping vote.id to Vote.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._votes: dict[UUID, Vote] = {}
        self._lock = asyncio.Lock()

    async def add(self, vote: Vote) -> None:
        """Store a new vote, enforcing one vote per member and appearance."""
        async with self._lock:
            if any(
                v.session_case_id == vote.session_case_id and v.member_id == vote.member_id
                for v in self._votes.values()
            ):
                raise DuplicateVoteError(vote.session_case_id, vote.member_id)
            self._votes[vote.id] = vote

    async def update(self, vote: Vote) -> None:
        """Replace a stored vote."""
        async with self._lock:
            if vote.id not in self._votes:
                raise NotFoundError("vote", vote.id)
            self._votes[vote.id] = vote

    async def get(self, vote_id: UUID) -> Vote | None:
        """Retrieve a vote by ID."""
        return self._votes.get(vote_id)

    async def get_by_member(self, session_case_id: UUID, member_id: UUID) -> Vote | None:
        """Retrieve a member's vote on an appearance."""
        return next(
            (
                v
                for v in self._votes.values()
                if v.session_case_id == session_case_id and v.member_id == member_id
            ),
            None,
        )

    async def list_for_session_case(self, session_case_id: UUID) -> list[Vote]:
        """List the votes on an appearance in recording order."""
        votes = [v for v in self._votes.values() if v.session_case_id == session_case_id]
        return sorted(votes, key=lambda v: v.created_at)

    async def count_for_session_case(self, session_case_id: UUID) -> int:
        """Count the votes on an appearance."""
        return sum(1 for v in self._votes.values() if v.session_case_id == session_case_id)

    async def delete(self, vote_id: UUID) -> None:
        """Remove a vote."""
        async with self._lock:
            self._votes.pop(vote_id, None)

    def clear(self) -> None:
        """Clear all stored votes (for testing)."""
        self._votes.clear()
