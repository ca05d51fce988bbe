"""Session, agenda and distribution API request/response models."""

from datetime import date, time
from uuid import UUID

from pydantic import BaseModel, Field

from src.api.models.case import DateTimeWithZ
from src.domain.models.session import CaseSessionStatus, SessionStatus, SessionType


class ScheduleSessionRequest(BaseModel):
    """Request to schedule a session.

    Attributes:
        session_type: ORDINARY or EXTRAORDINARY.
        session_date: Date of the sitting; its year scopes the numbering.
        president_id: Presiding member (casts the quality vote on ties).
        start_time: Optional start time.
        end_time: Optional end time.
        attending_member_ids: Members attending the sitting.
    """

    session_type: SessionType
    session_date: date
    president_id: UUID | None = None
    start_time: time | None = None
    end_time: time | None = None
    attending_member_ids: list[UUID] = Field(default_factory=list)


class AttendanceRequest(BaseModel):
    """Request replacing a session's attendance list."""

    member_ids: list[UUID]


class SessionTransitionRequest(BaseModel):
    """Request moving a session to a new status."""

    status: SessionStatus
    cancellation_reason: str | None = Field(
        default=None,
        description="Required when cancelling",
    )


class SessionResponse(BaseModel):
    """A scheduled session."""

    id: UUID
    number: str
    ordinal_number: int
    session_type: str
    session_date: date
    president_id: UUID | None = None
    status: str
    start_time: time | None = None
    end_time: time | None = None
    attending_member_ids: list[UUID]
    cancellation_reason: str | None = None
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ


class SessionProgressResponse(BaseModel):
    """Share of agenda cases that already have a result."""

    session_id: UUID
    progress_percent: float = Field(..., ge=0.0, le=100.0)


class AddToAgendaRequest(BaseModel):
    """Request placing a case on a session agenda.

    When a rapporteur is given the case is distributed in the same call.
    """

    case_id: UUID
    rapporteur_id: UUID | None = None
    reviewer_ids: list[UUID] = Field(default_factory=list)


class DistributionRequest(BaseModel):
    """Request assigning the rapporteur and reviewers of an appearance."""

    rapporteur_id: UUID
    reviewer_ids: list[UUID] = Field(default_factory=list)


class DistributionResponse(BaseModel):
    """Members assigned to judge a case appearance."""

    session_case_id: UUID
    rapporteur_id: UUID
    reviewer_ids: list[UUID]
    assigned_at: DateTimeWithZ


class SessionCaseResponse(BaseModel):
    """A case appearance on a session agenda."""

    id: UUID
    session_id: UUID
    case_id: UUID
    agenda_order: int
    status: str
    status_cause: str | None = None
    minutes_text: str | None = None
    result_text: str | None = None
    outcome: str | None = None
    winning_vote_id: UUID | None = None
    quality_vote_used: bool = False
    view_requested_by: UUID | None = None
    inquiry_deadline_days: int | None = None
    distribution: DistributionResponse | None = None


class AgendaResponse(BaseModel):
    """A session agenda in order."""

    session_id: UUID
    entries: list[SessionCaseResponse]


class ConfirmJudgmentRequest(BaseModel):
    """Request confirming the judgment of an appearance from its votes."""

    quality_vote_member_id: UUID | None = Field(
        default=None,
        description="Tie-breaking member; defaults to the session president",
    )
    minutes_text: str | None = None


class ChangeCaseStatusRequest(BaseModel):
    """Request applying a result to an appearance.

    Overrides (SUSPENDED, UNDER_INQUIRY, VIEW_REQUESTED, back to IN_AGENDA)
    require a cause; JUDGED is confirmed from the votes.
    """

    status: CaseSessionStatus
    cause: str | None = None
    view_requested_by: UUID | None = None
    inquiry_deadline_days: int | None = Field(default=None, ge=1)
    minutes_text: str | None = None
    quality_vote_member_id: UUID | None = None
