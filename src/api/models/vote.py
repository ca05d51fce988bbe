"""Vote API request/response models.

The member never sends the vote text on recording: it is composed from
the selected templates. An edit may replace the composed text verbatim.
"""

from uuid import UUID

from pydantic import BaseModel, Field

from src.api.models.case import DateTimeWithZ
from src.domain.models.vote import KnowledgeType, PreliminaryOutcome, VoteInput


class VoteChoicesRequest(BaseModel):
    """Structured vote choices.

    Attributes:
        knowledge_type: KNOWLEDGE or NON_KNOWLEDGE.
        preliminary_outcome: ACCEPT or REJECT (non-knowledge votes).
        preliminary_template_id: Preliminary template.
        merit_template_id: Merit template (knowledge votes).
        official_template_id: Ex-officio directive.
    """

    knowledge_type: KnowledgeType
    preliminary_outcome: PreliminaryOutcome | None = None
    preliminary_template_id: UUID | None = None
    merit_template_id: UUID | None = None
    official_template_id: UUID | None = None

    def to_vote_input(self) -> VoteInput:
        """Convert to the domain value."""
        return VoteInput(
            knowledge_type=self.knowledge_type,
            preliminary_outcome=self.preliminary_outcome,
            preliminary_template_id=self.preliminary_template_id,
            merit_template_id=self.merit_template_id,
            official_template_id=self.official_template_id,
        )


class RecordVoteRequest(VoteChoicesRequest):
    """Request recording a member's vote."""

    member_id: UUID


class EditVoteRequest(BaseModel):
    """Request editing a vote's choices and/or text.

    An empty edit is refused by the service as an invalid request.
    """

    choices: VoteChoicesRequest | None = None
    vote_text: str | None = Field(default=None, max_length=20000)


class VoteResponse(BaseModel):
    """A recorded vote with the member's derived role."""

    id: UUID
    session_case_id: UUID
    member_id: UUID
    role: str
    knowledge_type: str
    preliminary_outcome: str | None = None
    preliminary_template_id: UUID | None = None
    merit_template_id: UUID | None = None
    official_template_id: UUID | None = None
    vote_text: str
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ


class VoteListResponse(BaseModel):
    """Votes on a case appearance in recording order."""

    session_case_id: UUID
    votes: list[VoteResponse]


class VoteResolutionResponse(BaseModel):
    """Quorum and agreement state of a case appearance."""

    session_case_id: UUID
    votes_received: int
    votes_required: int
    quorum_met: bool
    is_resolved: bool
    outcome: str | None = None
    winning_vote_id: UUID | None = None
    votes_in_favor: int
    votes_against: int
    quality_vote_used: bool
