"""Registry API models: members, case authorities and vote templates.

These registries are external to the adjudication core; the endpoints
exist so a development deployment can be populated over HTTP.
"""

from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from src.domain.models.vote import TemplateKind


class MemberRequest(BaseModel):
    """Request registering a member."""

    name: str = Field(..., min_length=1, max_length=200)
    active: bool = True
    registered_authority_id: UUID | None = None


class MemberResponse(BaseModel):
    """A registered member."""

    id: UUID
    name: str
    active: bool
    registered_authority_id: UUID | None = None


class AuthorityRequest(BaseModel):
    """Request registering an authority on a case."""

    registered_id: UUID
    name: str = Field(..., min_length=1, max_length=200)
    authority_type: str = ""
    active: bool = True


class AuthorityResponse(BaseModel):
    """An authority registered on a case."""

    registered_id: UUID
    name: str
    authority_type: str
    active: bool


class TemplateRequest(BaseModel):
    """Request adding a vote template.

    Preliminary templates carry accept/reject texts; merit and official
    templates carry a single text.
    """

    kind: TemplateKind
    identifier: str = ""
    accept_text: str | None = None
    reject_text: str | None = None
    text: str | None = None

    @model_validator(mode="after")
    def validate_texts(self) -> "TemplateRequest":
        """Validate that the template carries the texts of its kind."""
        if self.kind is TemplateKind.PRELIMINARY:
            if not (self.accept_text or self.reject_text):
                raise ValueError("preliminary templates need accept_text or reject_text")
        elif not self.text:
            raise ValueError(f"{self.kind.value.lower()} templates need text")
        return self


class TemplateResponse(BaseModel):
    """A vote template."""

    id: UUID
    kind: str
    identifier: str
    accept_text: str | None = None
    reject_text: str | None = None
    text: str | None = None
