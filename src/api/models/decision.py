"""Decision (acórdão) API request/response models."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.api.models.case import DateTimeWithZ


class EmitDecisionRequest(BaseModel):
    """Request emitting the decision of a judged case."""

    case_id: UUID
    ementa_title: str = Field(..., min_length=1, max_length=1000)
    ementa_body: str = Field(..., min_length=1, max_length=50000)
    vote_file: str | None = Field(
        default=None, description="Opaque storage handle of the vote document"
    )


class UpdateEmentaRequest(BaseModel):
    """Request editing the ementa of a decision."""

    ementa_title: str = Field(..., min_length=1, max_length=1000)
    ementa_body: str = Field(..., min_length=1, max_length=50000)


class PublishDecisionRequest(BaseModel):
    """Request recording a gazette publication."""

    publication_number: str = Field(..., min_length=1, max_length=100)
    publication_date: date
    republish_reason: str | None = None

    @field_validator("publication_number")
    @classmethod
    def validate_publication_number(cls, v: str) -> str:
        """Validate the edition number is not only whitespace."""
        if not v.strip():
            raise ValueError("publication_number cannot be empty")
        return v.strip()


class PublishBatchRequest(BaseModel):
    """Request publishing several pending decisions in one edition."""

    decision_ids: list[UUID] = Field(..., min_length=1)
    publication_number: str = Field(..., min_length=1, max_length=100)
    publication_date: date


class AttachFileRequest(BaseModel):
    """Request attaching the decision document handle."""

    handle: str = Field(..., min_length=1, max_length=500)


class PublicationResponse(BaseModel):
    """One gazette publication with its ementa snapshot."""

    publication_order: int
    publication_number: str
    publication_date: date
    ementa_title_snapshot: str
    ementa_body_snapshot: str
    republish_reason: str | None = None
    created_at: DateTimeWithZ


class DecisionResponse(BaseModel):
    """A decision document and its publication history."""

    id: UUID
    case_id: UUID
    number: str
    ementa_title: str
    ementa_body: str
    vote_file: str | None = None
    decision_file: str | None = None
    status: str
    publications: list[PublicationResponse]
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ


class DecisionListResponse(BaseModel):
    """Decisions ordered by number."""

    decisions: list[DecisionResponse]
    total: int
