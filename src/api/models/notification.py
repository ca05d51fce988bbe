"""Notification (intimação) API request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.api.models.case import DateTimeWithZ
from src.domain.models.notification import Channel, ListType


class CreateListRequest(BaseModel):
    """Request creating a numbered notification list."""

    list_type: ListType
    year: int | None = Field(default=None, ge=1000, le=9999)


class AddItemRequest(BaseModel):
    """Request placing a case on a list."""

    case_id: UUID


class AddAttemptRequest(BaseModel):
    """Request recording a delivery attempt.

    EMAIL, WHATSAPP and CORREIOS require sent_to.
    """

    channel: Channel
    deadline: datetime | None = Field(
        default=None, description="Defaults to the configured notification deadline"
    )
    sent_to: str | None = Field(default=None, max_length=500)
    observations: str | None = Field(default=None, max_length=5000)


class ConfirmAttemptRequest(BaseModel):
    """Request confirming delivery of an attempt."""

    confirmed_by: str | None = Field(default=None, max_length=200)


class ExpireOverdueResponse(BaseModel):
    """Result of an overdue sweep."""

    expired: int


class AttemptResponse(BaseModel):
    """A delivery attempt."""

    id: UUID
    attempt_number: int
    channel: str
    deadline: DateTimeWithZ | None = None
    sent_to: str | None = None
    observations: str | None = None
    status: str
    sent_at: DateTimeWithZ | None = None
    confirmed_at: DateTimeWithZ | None = None
    confirmed_by: str | None = None


class ItemResponse(BaseModel):
    """A case on a list with its attempts."""

    id: UUID
    list_id: UUID
    case_id: UUID
    is_notified: bool
    attempts: list[AttemptResponse]


class NotificationListResponse(BaseModel):
    """A notification list."""

    id: UUID
    number: str
    list_type: str
    status: str
    created_at: DateTimeWithZ
    finalized_at: DateTimeWithZ | None = None


class NotificationListDetailResponse(NotificationListResponse):
    """A notification list with its items."""

    items: list[ItemResponse]


class NotificationListsResponse(BaseModel):
    """All notification lists ordered by number."""

    lists: list[NotificationListResponse]


class EligibleCasesResponse(BaseModel):
    """Cases eligible for a list type and not yet listed."""

    list_type: str
    case_ids: list[UUID]
