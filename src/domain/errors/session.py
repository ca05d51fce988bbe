"""Session and agenda errors."""

from __future__ import annotations

from uuid import UUID

from src.domain.exceptions import AdjudicationError


class SessionClosedError(AdjudicationError):
    """Raised when a concluded or cancelled session would be mutated.

    A concluded session freezes its agenda, distributions and votes.
    """

    def __init__(self, session_id: UUID, status: str) -> None:
        self.session_id = session_id
        self.status = status
        super().__init__(
            f"Session {session_id} is {status}; its agenda, distributions "
            "and votes can no longer change"
        )


class SessionNotConcludableError(AdjudicationError):
    """Raised when concluding a session whose agenda still has open cases."""

    def __init__(self, session_id: UUID, pending_cases: int) -> None:
        self.session_id = session_id
        self.pending_cases = pending_cases
        super().__init__(
            f"Session {session_id} still has {pending_cases} case(s) without "
            "a result; every agenda case needs a result before concluding"
        )


class MemberNotAttendingError(AdjudicationError):
    """Raised when a member referenced by an operation does not attend the session."""

    def __init__(self, session_id: UUID, member_id: UUID) -> None:
        self.session_id = session_id
        self.member_id = member_id
        super().__init__(
            f"Member {member_id} is not attending session {session_id}"
        )


class CaseNotInAgendaError(AdjudicationError):
    """Raised when an operation needs the case appearance to be IN_AGENDA."""

    def __init__(self, session_case_id: UUID, status: str) -> None:
        self.session_case_id = session_case_id
        self.status = status
        super().__init__(
            f"Case appearance {session_case_id} is {status}, not IN_AGENDA"
        )


class CaseUnavailableForAgendaError(AdjudicationError):
    """Raised when a case cannot enter an agenda in its current status."""

    def __init__(self, case_id: UUID, status: str) -> None:
        self.case_id = case_id
        self.status = status
        super().__init__(
            f"Case {case_id} is {status} and cannot be placed on an agenda"
        )


class DistributedMemberAbsentError(AdjudicationError):
    """Raised when attendance would drop a member distributed on an open case.

    Assignees of every IN_AGENDA appearance must attend the session.
    """

    def __init__(
        self, session_id: UUID, member_id: UUID, session_case_id: UUID
    ) -> None:
        self.session_id = session_id
        self.member_id = member_id
        self.session_case_id = session_case_id
        super().__init__(
            f"Member {member_id} is distributed on case appearance "
            f"{session_case_id} and must keep attending session {session_id}"
        )
