"""In-memory stub for SessionRepositoryProtocol.

Stores sessions and their case appearances. Enforces:
- unique yearly session number
- unique ordinal per (session type, year)
- unique agenda order within a session
"""

from __future__ import annotations

import asyncio
from uuid import UUID

from src.application.ports.session_repository import SessionRepositoryProtocol
from src.domain.errors import NotFoundError, SequenceConflictError
from src.domain.models.session import Session, SessionCase
from src.domain.models.sequence_number import SequenceScope


class SessionRepositoryStub(SessionRepositoryProtocol):
    """In-memory stub implementation of SessionRepositoryProtocol.

    Attributes:
        _sessions: Dictionary mapping session.id to Session.
        _session_cases: Dictionary mapping session_case.id to SessionCase.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._sessions: dict[UUID, Session] = {}
        self._session_cases: dict[UUID, SessionCase] = {}
        self._lock = asyncio.Lock()

    async def add_session(self, session: Session) -> None:
        """Store a new session, enforcing unique numbering."""
        async with self._lock:
            for existing in self._sessions.values():
                if existing.number == session.number:
                    raise SequenceConflictError(
                        SequenceScope.SESSION.value,
                        session.number.sequence,
                        session.number.year,
                    )
                if (
                    existing.session_type is session.session_type
                    and existing.number.year == session.number.year
                    and existing.ordinal_number == session.ordinal_number
                ):
                    raise SequenceConflictError(
                        session.session_type.ordinal_scope.value,
                        session.ordinal_number,
                        session.number.year,
                    )
            self._sessions[session.id] = session

    async def update_session(self, session: Session) -> None:
        """Replace a stored session."""
        async with self._lock:
            if session.id not in self._sessions:
                raise NotFoundError("session", session.id)
            self._sessions[session.id] = session

    async def get_session(self, session_id: UUID) -> Session | None:
        """Retrieve a session by ID."""
        return self._sessions.get(session_id)

    async def list_sessions(self, year: int | None = None) -> list[Session]:
        """List sessions ordered by number, optionally for one year."""
        sessions = [
            s for s in self._sessions.values() if year is None or s.number.year == year
        ]
        return sorted(sessions, key=lambda s: s.number)

    async def add_session_case(self, session_case: SessionCase) -> None:
        """Store a new appearance, enforcing a unique agenda order."""
        async with self._lock:
            if session_case.session_id not in self._sessions:
                raise NotFoundError("session", session_case.session_id)
            for existing in self._session_cases.values():
                if (
                    existing.session_id == session_case.session_id
                    and existing.agenda_order == session_case.agenda_order
                ):
                    raise SequenceConflictError("agenda_order", session_case.agenda_order)
            self._session_cases[session_case.id] = session_case

    async def update_session_case(self, session_case: SessionCase) -> None:
        """Replace a stored appearance."""
        async with self._lock:
            if session_case.id not in self._session_cases:
                raise NotFoundError("session case", session_case.id)
            self._session_cases[session_case.id] = session_case

    async def get_session_case(self, session_case_id: UUID) -> SessionCase | None:
        """Retrieve an appearance by ID."""
        return self._session_cases.get(session_case_id)

    async def list_session_cases(self, session_id: UUID) -> list[SessionCase]:
        """List the appearances of a session in agenda order."""
        appearances = [
            sc for sc in self._session_cases.values() if sc.session_id == session_id
        ]
        return sorted(appearances, key=lambda sc: sc.agenda_order)

    async def list_appearances_of_case(self, case_id: UUID) -> list[SessionCase]:
        """List every appearance of a case, oldest first."""
        appearances = [
            sc for sc in self._session_cases.values() if sc.case_id == case_id
        ]
        return sorted(appearances, key=lambda sc: sc.created_at)

    async def delete_session_case(self, session_case_id: UUID) -> None:
        """Remove an appearance."""
        async with self._lock:
            self._session_cases.pop(session_case_id, None)

    def clear(self) -> None:
        """Clear all stored sessions and appearances (for testing)."""
        self._sessions.clear()
        self._session_cases.clear()
