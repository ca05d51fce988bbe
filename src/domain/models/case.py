"""Case (recurso) domain model.

A case is a municipal tax appeal under committee review. It is the
anchor entity every other aggregate references. Its status is written
only through Case.with_status, by the session scheduler (agenda entry
and removal) and by case judgment (mirroring a session result).

State Machine:
    AWAITING_JUDGMENT -> IN_AGENDA (placed on a session agenda)
    IN_AGENDA -> AWAITING_JUDGMENT (removed from agenda, session cancelled)
    IN_AGENDA -> SUSPENDED | UNDER_INQUIRY | VIEW_REQUESTED | JUDGED
    SUSPENDED | UNDER_INQUIRY | VIEW_REQUESTED -> IN_AGENDA (continuance)

Terminal States:
    JUDGED. Cases are never destroyed.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from src.domain.models.sequence_number import SequenceNumber


class CaseStatus(Enum):
    """State in the case lifecycle.

    States:
        AWAITING_JUDGMENT: Registered, not on any open agenda
        IN_AGENDA: On the agenda of an open session
        SUSPENDED: Judgment suspended, awaiting a later session
        UNDER_INQUIRY: Sent for inquiry (diligência)
        VIEW_REQUESTED: A member requested to examine the file (vista)
        JUDGED: Judgment confirmed (terminal)
    """

    AWAITING_JUDGMENT = "AWAITING_JUDGMENT"
    IN_AGENDA = "IN_AGENDA"
    SUSPENDED = "SUSPENDED"
    UNDER_INQUIRY = "UNDER_INQUIRY"
    VIEW_REQUESTED = "VIEW_REQUESTED"
    JUDGED = "JUDGED"

    def is_terminal(self) -> bool:
        """Check if this state is terminal."""
        return self in CASE_TERMINAL_STATES

    def valid_transitions(self) -> frozenset[CaseStatus]:
        """Get valid transitions from this state."""
        return CASE_TRANSITION_MATRIX.get(self, frozenset())

    def can_enter_agenda(self) -> bool:
        """Whether a case in this state may be placed on an agenda."""
        return CaseStatus.IN_AGENDA in self.valid_transitions()


CASE_TERMINAL_STATES: frozenset[CaseStatus] = frozenset({CaseStatus.JUDGED})

_CONTINUABLE: frozenset[CaseStatus] = frozenset(
    {CaseStatus.IN_AGENDA, CaseStatus.AWAITING_JUDGMENT}
)

CASE_TRANSITION_MATRIX: dict[CaseStatus, frozenset[CaseStatus]] = {
    CaseStatus.AWAITING_JUDGMENT: frozenset({CaseStatus.IN_AGENDA}),
    CaseStatus.IN_AGENDA: frozenset(
        {
            CaseStatus.AWAITING_JUDGMENT,
            CaseStatus.SUSPENDED,
            CaseStatus.UNDER_INQUIRY,
            CaseStatus.VIEW_REQUESTED,
            CaseStatus.JUDGED,
        }
    ),
    # Continued cases come back through a later agenda, or drop back to
    # the waiting pool when their result is corrected in the same session.
    CaseStatus.SUSPENDED: _CONTINUABLE,
    CaseStatus.UNDER_INQUIRY: _CONTINUABLE,
    CaseStatus.VIEW_REQUESTED: _CONTINUABLE,
    CaseStatus.JUDGED: frozenset(),
}


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Case:
    """A tax appeal under committee review.

    Attributes:
        id: UUIDv7 unique identifier.
        number: Yearly case number ("0012/2025").
        classification: Classification type of the appeal.
        status: Current adjudication status.
        status_cause: Cause recorded with the last status change.
        created_at: Intake timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    id: UUID
    number: SequenceNumber
    classification: str
    status: CaseStatus = field(default=CaseStatus.AWAITING_JUDGMENT)
    status_cause: str | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def with_status(self, new_status: CaseStatus, cause: str | None = None) -> Case:
        """Create new case with updated status.

        This is the only writer of Case.status.

        Args:
            new_status: The status to transition to.
            cause: Optional cause recorded with the change.

        Returns:
            New Case with updated status and timestamp.

        Raises:
            InvalidStateTransitionError: If the transition is not in the matrix.
        """
        from src.domain.errors.state_transition import InvalidStateTransitionError

        valid_transitions = self.status.valid_transitions()
        if new_status not in valid_transitions:
            raise InvalidStateTransitionError(
                entity="case",
                from_state=self.status,
                to_state=new_status,
                allowed_transitions=list(valid_transitions),
            )

        return replace(
            self,
            status=new_status,
            status_cause=cause,
            updated_at=_utc_now(),
        )
