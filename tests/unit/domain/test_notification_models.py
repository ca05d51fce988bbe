"""Unit tests for notification lists, items and delivery attempts."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from src.domain.errors import (
    AttemptAlreadyConfirmedError,
    AttemptExpiredError,
    InvalidStateTransitionError,
    NotificationListFinalizedError,
)
from src.domain.models.notification import (
    AttemptStatus,
    Channel,
    ListStatus,
    ListType,
    NotificationAttempt,
    NotificationItem,
    NotificationList,
)
from src.domain.models.sequence_number import SequenceNumber, SequenceScope

NOW = datetime(2025, 3, 12, 9, 0, tzinfo=timezone.utc)


def _attempt(number: int = 1, deadline: datetime | None = None) -> NotificationAttempt:
    return NotificationAttempt(
        id=uuid4(),
        attempt_number=number,
        channel=Channel.EMAIL,
        sent_to="parte@example.com",
        deadline=deadline,
    )


class TestChannel:
    """Tests for channel destination rules."""

    @pytest.mark.parametrize("channel", [Channel.EMAIL, Channel.WHATSAPP, Channel.CORREIOS])
    def test_addressed_channels_need_destination(self, channel: Channel) -> None:
        assert channel.requires_destination

    @pytest.mark.parametrize("channel", [Channel.IN_PERSON, Channel.PUBLIC_NOTICE])
    def test_unaddressed_channels(self, channel: Channel) -> None:
        assert not channel.requires_destination

    def test_destination_labels(self) -> None:
        assert Channel.WHATSAPP.destination_label == "phone number"


class TestAttemptStatus:
    """Tests for NotificationAttempt.with_status."""

    def test_sent_then_confirmed(self) -> None:
        sent = _attempt().with_status(AttemptStatus.SENT, at=NOW)
        assert sent.sent_at == NOW
        confirmed = sent.with_status(AttemptStatus.CONFIRMED, at=NOW, confirmed_by="clerk")
        assert confirmed.status is AttemptStatus.CONFIRMED
        assert confirmed.confirmed_by == "clerk"

    def test_confirmed_attempt_cannot_change(self) -> None:
        confirmed = _attempt().with_status(AttemptStatus.CONFIRMED)
        with pytest.raises(AttemptAlreadyConfirmedError):
            confirmed.with_status(AttemptStatus.EXPIRED)

    def test_expired_attempt_cannot_be_confirmed(self) -> None:
        expired = _attempt().with_status(AttemptStatus.EXPIRED)
        with pytest.raises(AttemptExpiredError):
            expired.with_status(AttemptStatus.CONFIRMED)

    def test_sent_cannot_go_back_to_pending(self) -> None:
        sent = _attempt().with_status(AttemptStatus.SENT)
        with pytest.raises(InvalidStateTransitionError):
            sent.with_status(AttemptStatus.PENDING)

    def test_overdue_only_while_open(self) -> None:
        attempt = _attempt(deadline=NOW - timedelta(days=1))
        assert attempt.is_overdue(NOW)
        assert not attempt.with_status(AttemptStatus.CONFIRMED).is_overdue(NOW)
        assert not _attempt().is_overdue(NOW)


class TestNotificationItem:
    """Tests for NotificationItem attempt bookkeeping."""

    def test_attempts_are_numbered_in_order(self) -> None:
        item = NotificationItem(id=uuid4(), list_id=uuid4(), case_id=uuid4())
        item = item.with_attempt(_attempt(1)).with_attempt(_attempt(2))
        assert [a.attempt_number for a in item.attempts] == [1, 2]
        with pytest.raises(ValueError, match="attempt_number must be 3"):
            item.with_attempt(_attempt(5))

    def test_notified_once_any_attempt_confirmed(self) -> None:
        first = _attempt(1)
        item = NotificationItem(id=uuid4(), list_id=uuid4(), case_id=uuid4())
        item = item.with_attempt(first).with_attempt(_attempt(2))
        assert not item.is_notified
        item = item.with_replaced_attempt(first.with_status(AttemptStatus.CONFIRMED))
        assert item.is_notified
        assert item.find_attempt(first.id).status is AttemptStatus.CONFIRMED


class TestNotificationList:
    """Tests for NotificationList finalization."""

    def test_finalize_once(self) -> None:
        notification_list = NotificationList(
            id=uuid4(),
            number=SequenceNumber.for_scope(SequenceScope.NOTIFICATION_LIST, 7, 2025),
            list_type=ListType.SESSION,
        )
        finalized = notification_list.finalized()
        assert finalized.status is ListStatus.FINALIZED
        assert finalized.finalized_at is not None
        assert str(finalized.number) == "007/2025"
        with pytest.raises(NotificationListFinalizedError):
            finalized.finalized()
