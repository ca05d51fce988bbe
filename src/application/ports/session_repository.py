"""Session repository port.

Stores sessions and the case appearances (SessionCase) on their agendas.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.session import Session, SessionCase


class SessionRepositoryProtocol(Protocol):
    """Protocol for session and agenda storage operations."""

    async def add_session(self, session: Session) -> None:
        """Store a new session.

        Raises:
            SequenceConflictError: If the session number is already taken.
        """
        ...

    async def update_session(self, session: Session) -> None:
        """Replace a stored session.

        Raises:
            NotFoundError: If the session does not exist.
        """
        ...

    async def get_session(self, session_id: UUID) -> Session | None:
        """Retrieve a session by ID."""
        ...

    async def list_sessions(self, year: int | None = None) -> list[Session]:
        """List sessions ordered by number, optionally for one year."""
        ...

    async def add_session_case(self, session_case: SessionCase) -> None:
        """Store a new case appearance.

        Raises:
            SequenceConflictError: If the agenda order is already taken.
        """
        ...

    async def update_session_case(self, session_case: SessionCase) -> None:
        """Replace a stored case appearance.

        Raises:
            NotFoundError: If the appearance does not exist.
        """
        ...

    async def get_session_case(self, session_case_id: UUID) -> SessionCase | None:
        """Retrieve a case appearance by ID."""
        ...

    async def list_session_cases(self, session_id: UUID) -> list[SessionCase]:
        """List the agenda of a session in agenda order."""
        ...

    async def list_appearances_of_case(self, case_id: UUID) -> list[SessionCase]:
        """List every appearance of a case, oldest first."""
        ...

    async def delete_session_case(self, session_case_id: UUID) -> None:
        """Remove a case appearance from its agenda."""
        ...
