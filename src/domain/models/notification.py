"""Notification (intimação) tracking domain models.

Parties are notified of agenda, inquiry and decision events through
numbered notification lists. Each list holds one item per case, and each
item records its delivery attempts in order.

Attempt State Machine:
    PENDING -> SENT -> CONFIRMED
    PENDING -> CONFIRMED
    PENDING | SENT -> EXPIRED (deadline passed)

Terminal States:
    CONFIRMED, EXPIRED
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from src.domain.models.sequence_number import SequenceNumber


class ListType(Enum):
    """What a notification list notifies about."""

    ADMISSIBILITY = "ADMISSIBILITY"
    SESSION = "SESSION"
    INQUIRY = "INQUIRY"
    DECISION = "DECISION"
    OTHER = "OTHER"


class ListStatus(Enum):
    """Notification list status."""

    PENDING = "PENDING"
    FINALIZED = "FINALIZED"


class Channel(Enum):
    """Delivery channel of a notification attempt."""

    EMAIL = "EMAIL"
    WHATSAPP = "WHATSAPP"
    CORREIOS = "CORREIOS"
    IN_PERSON = "IN_PERSON"
    PUBLIC_NOTICE = "PUBLIC_NOTICE"

    @property
    def requires_destination(self) -> bool:
        """Whether the channel needs an address, phone or e-mail."""
        return self in _ADDRESSED_CHANNELS

    @property
    def destination_label(self) -> str:
        """Human label of the destination this channel needs."""
        return _DESTINATION_LABELS.get(self, "destination")


_ADDRESSED_CHANNELS: frozenset[Channel] = frozenset(
    {Channel.EMAIL, Channel.WHATSAPP, Channel.CORREIOS}
)

_DESTINATION_LABELS: dict[Channel, str] = {
    Channel.EMAIL: "e-mail address",
    Channel.WHATSAPP: "phone number",
    Channel.CORREIOS: "postal address",
}


class AttemptStatus(Enum):
    """Delivery attempt status."""

    PENDING = "PENDING"
    SENT = "SENT"
    CONFIRMED = "CONFIRMED"
    EXPIRED = "EXPIRED"

    def is_terminal(self) -> bool:
        """Check if this state is terminal."""
        return self in ATTEMPT_TERMINAL_STATES

    def valid_transitions(self) -> frozenset[AttemptStatus]:
        """Get valid transitions from this state."""
        return ATTEMPT_TRANSITION_MATRIX.get(self, frozenset())


ATTEMPT_TERMINAL_STATES: frozenset[AttemptStatus] = frozenset(
    {AttemptStatus.CONFIRMED, AttemptStatus.EXPIRED}
)

ATTEMPT_TRANSITION_MATRIX: dict[AttemptStatus, frozenset[AttemptStatus]] = {
    AttemptStatus.PENDING: frozenset(
        {AttemptStatus.SENT, AttemptStatus.CONFIRMED, AttemptStatus.EXPIRED}
    ),
    AttemptStatus.SENT: frozenset({AttemptStatus.CONFIRMED, AttemptStatus.EXPIRED}),
    AttemptStatus.CONFIRMED: frozenset(),
    AttemptStatus.EXPIRED: frozenset(),
}


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class NotificationAttempt:
    """One delivery attempt for a notification item.

    Attributes:
        id: UUIDv7 unique identifier.
        attempt_number: Sequential per item, starting at 1.
        channel: Delivery channel.
        deadline: When an unconfirmed attempt expires.
        sent_to: Destination (address, phone or e-mail).
        observations: Free notes.
        status: Attempt status.
        sent_at: When the attempt was sent.
        confirmed_at: When delivery was confirmed.
        confirmed_by: Who confirmed delivery.
    """

    id: UUID
    attempt_number: int
    channel: Channel
    deadline: datetime | None = field(default=None)
    sent_to: str | None = field(default=None)
    observations: str | None = field(default=None)
    status: AttemptStatus = field(default=AttemptStatus.PENDING)
    sent_at: datetime | None = field(default=None)
    confirmed_at: datetime | None = field(default=None)
    confirmed_by: str | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate attempt invariants."""
        if self.attempt_number < 1:
            raise ValueError(f"attempt_number must be >= 1, got {self.attempt_number}")

    def is_overdue(self, now: datetime) -> bool:
        """Open attempt whose deadline has passed."""
        return (
            not self.status.is_terminal()
            and self.deadline is not None
            and self.deadline < now
        )

    def with_status(
        self,
        new_status: AttemptStatus,
        at: datetime | None = None,
        confirmed_by: str | None = None,
    ) -> NotificationAttempt:
        """Create new attempt with updated status.

        Args:
            new_status: The status to transition to.
            at: Moment of the change (defaults to now).
            confirmed_by: Who confirmed delivery (CONFIRMED only).

        Raises:
            AttemptAlreadyConfirmedError: If already confirmed.
            AttemptExpiredError: If already expired.
            InvalidStateTransitionError: For any other move outside the matrix.
        """
        from src.domain.errors.notification import (
            AttemptAlreadyConfirmedError,
            AttemptExpiredError,
        )
        from src.domain.errors.state_transition import InvalidStateTransitionError

        if self.status is AttemptStatus.CONFIRMED:
            raise AttemptAlreadyConfirmedError(self.id)
        if self.status is AttemptStatus.EXPIRED:
            raise AttemptExpiredError(self.id)
        valid_transitions = self.status.valid_transitions()
        if new_status not in valid_transitions:
            raise InvalidStateTransitionError(
                entity="notification_attempt",
                from_state=self.status,
                to_state=new_status,
                allowed_transitions=list(valid_transitions),
            )

        moment = at or _utc_now()
        if new_status is AttemptStatus.SENT:
            return replace(self, status=new_status, sent_at=moment)
        if new_status is AttemptStatus.CONFIRMED:
            return replace(
                self,
                status=new_status,
                confirmed_at=moment,
                confirmed_by=confirmed_by,
            )
        return replace(self, status=new_status)


@dataclass(frozen=True, eq=True)
class NotificationItem:
    """A case on a notification list, with its delivery attempts.

    Attributes:
        id: UUIDv7 unique identifier.
        list_id: Owning list.
        case_id: Notified case.
        attempts: Attempts in attempt_number order.
    """

    id: UUID
    list_id: UUID
    case_id: UUID
    attempts: tuple[NotificationAttempt, ...] = field(default_factory=tuple)

    @property
    def is_notified(self) -> bool:
        """An item is notified once any attempt is confirmed."""
        return any(a.status is AttemptStatus.CONFIRMED for a in self.attempts)

    @property
    def next_attempt_number(self) -> int:
        """Number the next attempt will take."""
        return len(self.attempts) + 1

    def find_attempt(self, attempt_id: UUID) -> NotificationAttempt | None:
        """Look up an attempt by id."""
        return next((a for a in self.attempts if a.id == attempt_id), None)

    def with_attempt(self, attempt: NotificationAttempt) -> NotificationItem:
        """Create new item with an attempt appended."""
        if attempt.attempt_number != self.next_attempt_number:
            raise ValueError(
                f"attempt_number must be {self.next_attempt_number}, "
                f"got {attempt.attempt_number}"
            )
        return replace(self, attempts=(*self.attempts, attempt))

    def with_replaced_attempt(self, attempt: NotificationAttempt) -> NotificationItem:
        """Create new item with one attempt replaced by id."""
        return replace(
            self,
            attempts=tuple(attempt if a.id == attempt.id else a for a in self.attempts),
        )


@dataclass(frozen=True, eq=True)
class NotificationList:
    """A numbered notification list.

    Attributes:
        id: UUIDv7 unique identifier.
        number: Yearly list number ("007/2025").
        list_type: What the list notifies about.
        status: PENDING while open, FINALIZED once closed.
        created_at: Creation timestamp (UTC).
        finalized_at: When the list was finalized.
    """

    id: UUID
    number: SequenceNumber
    list_type: ListType
    status: ListStatus = field(default=ListStatus.PENDING)
    created_at: datetime = field(default_factory=_utc_now)
    finalized_at: datetime | None = field(default=None)

    @property
    def is_finalized(self) -> bool:
        """Whether the list no longer accepts items or attempts."""
        return self.status is ListStatus.FINALIZED

    def ensure_open(self) -> None:
        """Raise NotificationListFinalizedError if the list is finalized."""
        from src.domain.errors.notification import NotificationListFinalizedError

        if self.is_finalized:
            raise NotificationListFinalizedError(self.id)

    def finalized(self) -> NotificationList:
        """Create new list in FINALIZED status."""
        self.ensure_open()
        return replace(self, status=ListStatus.FINALIZED, finalized_at=_utc_now())
