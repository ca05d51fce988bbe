"""Judgment session and case-appearance domain models.

A Session is one committee sitting. Each case placed on its agenda gets a
SessionCase, the appearance of that case in that session, which carries
the per-session result. A case continued to a later session gets a new
SessionCase there; the earlier appearance keeps its own result.

Session State Machine:
    AWAITING_PUBLICATION -> AGENDA_PUBLISHED -> IN_PROGRESS -> CONCLUDED
    any non-terminal state -> CANCELLED

Case Appearance State Machine:
    IN_AGENDA -> SUSPENDED | UNDER_INQUIRY | VIEW_REQUESTED | JUDGED
    SUSPENDED | UNDER_INQUIRY | VIEW_REQUESTED -> IN_AGENDA (correction)

Terminal States:
    Session: CONCLUDED, CANCELLED
    SessionCase: JUDGED
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timezone
from enum import Enum
from uuid import UUID

from src.domain.models.case import CaseStatus
from src.domain.models.sequence_number import SequenceNumber, SequenceScope
from src.domain.models.vote import JudgmentOutcome, VoteResolution

# Unresolved marker left in generated minutes until a clerk fills it in.
DETAIL_PLACEHOLDER = "[DETALHAR]"


class SessionType(Enum):
    """Kind of sitting; ordinal numbers are counted per type and year."""

    ORDINARY = "ORDINARY"
    EXTRAORDINARY = "EXTRAORDINARY"

    @property
    def ordinal_scope(self) -> SequenceScope:
        """Sequence from which this type's ordinal numbers are drawn."""
        if self is SessionType.EXTRAORDINARY:
            return SequenceScope.EXTRAORDINARY_SESSION_ORDINAL
        return SequenceScope.ORDINARY_SESSION_ORDINAL


class SessionStatus(Enum):
    """State in the session lifecycle.

    States:
        AWAITING_PUBLICATION: Scheduled, agenda being assembled
        AGENDA_PUBLISHED: Agenda published to the parties
        IN_PROGRESS: Session under way
        CONCLUDED: Closed; distributions and votes are frozen (terminal)
        CANCELLED: Called off (terminal)
    """

    AWAITING_PUBLICATION = "AWAITING_PUBLICATION"
    AGENDA_PUBLISHED = "AGENDA_PUBLISHED"
    IN_PROGRESS = "IN_PROGRESS"
    CONCLUDED = "CONCLUDED"
    CANCELLED = "CANCELLED"

    def is_terminal(self) -> bool:
        """Check if this state is terminal."""
        return self in SESSION_TERMINAL_STATES

    def valid_transitions(self) -> frozenset[SessionStatus]:
        """Get valid transitions from this state."""
        return SESSION_TRANSITION_MATRIX.get(self, frozenset())


SESSION_TERMINAL_STATES: frozenset[SessionStatus] = frozenset(
    {SessionStatus.CONCLUDED, SessionStatus.CANCELLED}
)

SESSION_TRANSITION_MATRIX: dict[SessionStatus, frozenset[SessionStatus]] = {
    SessionStatus.AWAITING_PUBLICATION: frozenset(
        {SessionStatus.AGENDA_PUBLISHED, SessionStatus.CANCELLED}
    ),
    SessionStatus.AGENDA_PUBLISHED: frozenset(
        {SessionStatus.IN_PROGRESS, SessionStatus.CANCELLED}
    ),
    SessionStatus.IN_PROGRESS: frozenset(
        {SessionStatus.CONCLUDED, SessionStatus.CANCELLED}
    ),
    SessionStatus.CONCLUDED: frozenset(),
    SessionStatus.CANCELLED: frozenset(),
}


class CaseSessionStatus(Enum):
    """State of a case appearance within one session.

    States:
        IN_AGENDA: Awaiting a result in this session
        SUSPENDED: Judgment suspended
        UNDER_INQUIRY: Sent for inquiry with a deadline in days
        VIEW_REQUESTED: A member asked to examine the file
        JUDGED: Judgment confirmed from resolved votes (terminal)
    """

    IN_AGENDA = "IN_AGENDA"
    SUSPENDED = "SUSPENDED"
    UNDER_INQUIRY = "UNDER_INQUIRY"
    VIEW_REQUESTED = "VIEW_REQUESTED"
    JUDGED = "JUDGED"

    def is_terminal(self) -> bool:
        """Check if this state is terminal."""
        return self is CaseSessionStatus.JUDGED

    def valid_transitions(self) -> frozenset[CaseSessionStatus]:
        """Get valid transitions from this state."""
        return CASE_SESSION_TRANSITION_MATRIX.get(self, frozenset())

    def has_result(self) -> bool:
        """Whether the appearance left the agenda with a result."""
        return self is not CaseSessionStatus.IN_AGENDA

    @property
    def case_status(self) -> CaseStatus:
        """Case status mirrored from this appearance status."""
        return CaseStatus(self.value)


CASE_SESSION_TRANSITION_MATRIX: dict[CaseSessionStatus, frozenset[CaseSessionStatus]] = {
    CaseSessionStatus.IN_AGENDA: frozenset(
        {
            CaseSessionStatus.SUSPENDED,
            CaseSessionStatus.UNDER_INQUIRY,
            CaseSessionStatus.VIEW_REQUESTED,
            CaseSessionStatus.JUDGED,
        }
    ),
    CaseSessionStatus.SUSPENDED: frozenset({CaseSessionStatus.IN_AGENDA}),
    CaseSessionStatus.UNDER_INQUIRY: frozenset({CaseSessionStatus.IN_AGENDA}),
    CaseSessionStatus.VIEW_REQUESTED: frozenset({CaseSessionStatus.IN_AGENDA}),
    CaseSessionStatus.JUDGED: frozenset(),
}


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


def _has_usable_text(text: str | None) -> bool:
    return bool(text and text.strip()) and DETAIL_PLACEHOLDER not in (text or "")


@dataclass(frozen=True, eq=True)
class Session:
    """A committee judgment session.

    Attributes:
        id: UUIDv7 unique identifier.
        number: Yearly session number ("0003/2025").
        ordinal_number: Ordinal within the year for this session type.
        session_type: Ordinary or extraordinary.
        session_date: Date of the sitting.
        president_id: Member presiding (holds the quality vote).
        status: Current lifecycle status.
        start_time: Scheduled start.
        end_time: Scheduled end.
        attending_member_ids: Members present.
        cancellation_reason: Recorded when cancelled.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    id: UUID
    number: SequenceNumber
    ordinal_number: int
    session_type: SessionType
    session_date: date
    president_id: UUID | None = field(default=None)
    status: SessionStatus = field(default=SessionStatus.AWAITING_PUBLICATION)
    start_time: time | None = field(default=None)
    end_time: time | None = field(default=None)
    attending_member_ids: tuple[UUID, ...] = field(default_factory=tuple)
    cancellation_reason: str | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate session invariants."""
        if self.ordinal_number < 1:
            raise ValueError(f"ordinal_number must be >= 1, got {self.ordinal_number}")
        if len(set(self.attending_member_ids)) != len(self.attending_member_ids):
            raise ValueError("attending_member_ids must not contain duplicates")

    @property
    def is_open(self) -> bool:
        """Agenda, attendance, distributions and votes may still change."""
        return not self.status.is_terminal()

    def is_attending(self, member_id: UUID) -> bool:
        """Check whether a member attends this session."""
        return member_id in self.attending_member_ids

    def ensure_open(self) -> None:
        """Raise SessionClosedError unless the session accepts mutations."""
        from src.domain.errors.session import SessionClosedError

        if not self.is_open:
            raise SessionClosedError(self.id, self.status.value)

    def with_attendance(self, member_ids: tuple[UUID, ...]) -> Session:
        """Create new session with the given attendance list."""
        self.ensure_open()
        return replace(
            self,
            attending_member_ids=tuple(dict.fromkeys(member_ids)),
            updated_at=_utc_now(),
        )

    def with_status(
        self,
        new_status: SessionStatus,
        cancellation_reason: str | None = None,
    ) -> Session:
        """Create new session with updated status.

        This is the only writer of Session.status. Agenda-dependent
        guards (conclusion needs every case to have a result) are checked
        by the scheduler, which sees the agenda.

        Args:
            new_status: The status to transition to.
            cancellation_reason: Required when cancelling.

        Returns:
            New Session with updated status and timestamp.

        Raises:
            SessionClosedError: If the session is already terminal.
            InvalidStateTransitionError: If the transition is not in the matrix.
            MissingTransitionCauseError: If cancelling without a reason.
        """
        from src.domain.errors.state_transition import (
            InvalidStateTransitionError,
            MissingTransitionCauseError,
        )

        self.ensure_open()
        valid_transitions = self.status.valid_transitions()
        if new_status not in valid_transitions:
            raise InvalidStateTransitionError(
                entity="session",
                from_state=self.status,
                to_state=new_status,
                allowed_transitions=list(valid_transitions),
            )
        if new_status is SessionStatus.CANCELLED and not _has_usable_text(
            cancellation_reason
        ):
            raise MissingTransitionCauseError(new_status, "cancellation reason")

        return replace(
            self,
            status=new_status,
            cancellation_reason=(
                cancellation_reason.strip()
                if new_status is SessionStatus.CANCELLED and cancellation_reason
                else self.cancellation_reason
            ),
            updated_at=_utc_now(),
        )


@dataclass(frozen=True, eq=True)
class SessionCase:
    """Appearance of a case on a session agenda.

    Attributes:
        id: UUIDv7 unique identifier.
        session_id: Session whose agenda holds the case.
        case_id: The case.
        agenda_order: Position in the agenda (1-based).
        status: Result of the case in this session.
        status_cause: Cause recorded with the last administrative change.
        minutes_text: Minutes entry for the appearance.
        result_text: Winning vote text once judged.
        outcome: Resolved judgment outcome once judged.
        winning_vote_id: Vote whose text became the result.
        quality_vote_used: The president's quality vote broke a tie.
        view_requested_by: Member who requested to examine the file.
        inquiry_deadline_days: Inquiry deadline in days.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    id: UUID
    session_id: UUID
    case_id: UUID
    agenda_order: int
    status: CaseSessionStatus = field(default=CaseSessionStatus.IN_AGENDA)
    status_cause: str | None = field(default=None)
    minutes_text: str | None = field(default=None)
    result_text: str | None = field(default=None)
    outcome: JudgmentOutcome | None = field(default=None)
    winning_vote_id: UUID | None = field(default=None)
    quality_vote_used: bool = field(default=False)
    view_requested_by: UUID | None = field(default=None)
    inquiry_deadline_days: int | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate appearance invariants."""
        if self.agenda_order < 1:
            raise ValueError(f"agenda_order must be >= 1, got {self.agenda_order}")

    def with_status(
        self,
        new_status: CaseSessionStatus,
        cause: str | None = None,
        resolution: VoteResolution | None = None,
        result_text: str | None = None,
        view_requested_by: UUID | None = None,
        inquiry_deadline_days: int | None = None,
        minutes_text: str | None = None,
    ) -> SessionCase:
        """Create new appearance with updated status.

        This is the only writer of SessionCase.status. Moving to JUDGED
        requires a resolved vote resolution; every other move is an
        administrative override and requires a recorded cause.

        Args:
            new_status: The status to transition to.
            cause: Cause of an administrative override.
            resolution: Current vote resolution (required for JUDGED).
            result_text: Winning vote text (JUDGED).
            view_requested_by: Requesting member (VIEW_REQUESTED).
            inquiry_deadline_days: Deadline in days (UNDER_INQUIRY).
            minutes_text: Optional minutes entry.

        Returns:
            New SessionCase with updated status and timestamp.

        Raises:
            InvalidStateTransitionError: If the transition is not in the matrix.
            NoVotesRecordedError: If judging with zero votes.
            VoteNotResolvedError: If judging without quorum and agreement.
            MissingTransitionCauseError: If an override lacks its cause.
        """
        from src.domain.errors.state_transition import (
            InvalidStateTransitionError,
            MissingTransitionCauseError,
            NoVotesRecordedError,
            VoteNotResolvedError,
        )

        valid_transitions = self.status.valid_transitions()
        if new_status not in valid_transitions:
            raise InvalidStateTransitionError(
                entity="session_case",
                from_state=self.status,
                to_state=new_status,
                allowed_transitions=list(valid_transitions),
            )
        if minutes_text is not None and DETAIL_PLACEHOLDER in minutes_text:
            raise MissingTransitionCauseError(
                new_status, f"minutes still contain {DETAIL_PLACEHOLDER}"
            )

        if new_status is CaseSessionStatus.JUDGED:
            if resolution is None or resolution.votes_received == 0:
                raise NoVotesRecordedError(self.id)
            if not resolution.is_resolved:
                raise VoteNotResolvedError(
                    session_case_id=self.id,
                    votes_received=resolution.votes_received,
                    votes_required=resolution.votes_required,
                    quorum_met=resolution.quorum_met,
                )
            return replace(
                self,
                status=new_status,
                status_cause=cause.strip() if cause else None,
                result_text=result_text,
                outcome=resolution.outcome,
                winning_vote_id=resolution.winning_vote_id,
                quality_vote_used=resolution.quality_vote_used,
                minutes_text=minutes_text if minutes_text is not None else self.minutes_text,
                updated_at=_utc_now(),
            )

        if not cause or not cause.strip():
            raise MissingTransitionCauseError(new_status)
        if DETAIL_PLACEHOLDER in cause:
            raise MissingTransitionCauseError(
                new_status, f"cause still contains {DETAIL_PLACEHOLDER}"
            )
        if new_status is CaseSessionStatus.VIEW_REQUESTED and view_requested_by is None:
            raise MissingTransitionCauseError(new_status, "requesting member")
        if new_status is CaseSessionStatus.UNDER_INQUIRY and (
            inquiry_deadline_days is None or inquiry_deadline_days < 1
        ):
            raise MissingTransitionCauseError(
                new_status, "a positive inquiry deadline in days"
            )

        return replace(
            self,
            status=new_status,
            status_cause=cause.strip(),
            view_requested_by=(
                view_requested_by
                if new_status is CaseSessionStatus.VIEW_REQUESTED
                else None
            ),
            inquiry_deadline_days=(
                inquiry_deadline_days
                if new_status is CaseSessionStatus.UNDER_INQUIRY
                else None
            ),
            minutes_text=minutes_text if minutes_text is not None else self.minutes_text,
            updated_at=_utc_now(),
        )


def session_progress(appearances: list[SessionCase]) -> float:
    """Percentage of agenda cases that already have a result.

    Derived on demand, never persisted. An empty agenda reports 0.
    """
    if not appearances:
        return 0.0
    done = sum(1 for appearance in appearances if appearance.status.has_result())
    return round(100.0 * done / len(appearances), 2)
