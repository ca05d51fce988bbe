"""Case registry API request/response models.

Developer Golden Rules:
1. VALIDATE EARLY - Pydantic handles schema validation
2. FAIL LOUD - Invalid requests return 400/404/409 with RFC 7807
3. NUMBERS AS TEXT - Yearly numbers are rendered "0001/2025"
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, PlainSerializer, field_validator

# ISO 8601 with Z suffix (Pydantic v2)
DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(
        lambda v: v.isoformat().replace("+00:00", "Z") if v else None, return_type=str
    ),
]


class RegisterCaseRequest(BaseModel):
    """Request to register a case.

    Attributes:
        classification: Classification type of the appeal.
        year: Numbering year (defaults to the current year).
    """

    classification: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Classification type of the appeal",
    )
    year: int | None = Field(
        default=None,
        ge=1000,
        le=9999,
        description="Numbering year; defaults to the current year",
    )

    @field_validator("classification")
    @classmethod
    def validate_classification(cls, v: str) -> str:
        """Validate classification is not only whitespace."""
        if not v.strip():
            raise ValueError("classification cannot be empty or whitespace only")
        return v.strip()


class CaseResponse(BaseModel):
    """A registered case."""

    id: UUID
    number: str = Field(..., description="Yearly number, e.g. 0001/2025")
    classification: str
    status: str
    status_cause: str | None = None
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ


class CaseListResponse(BaseModel):
    """Cases ordered by number."""

    cases: list[CaseResponse]
    total: int
