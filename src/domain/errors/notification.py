"""Notification (intimação) tracking errors."""

from __future__ import annotations

from uuid import UUID

from src.domain.exceptions import AdjudicationError


class NotificationListFinalizedError(AdjudicationError):
    """Raised when a finalized list would receive items or attempts."""

    def __init__(self, list_id: UUID) -> None:
        self.list_id = list_id
        super().__init__(
            f"Notification list {list_id} is finalized; items and attempts "
            "can no longer be added"
        )


class NotificationListNotEmptyError(AdjudicationError):
    """Raised when deleting a list that still holds items."""

    def __init__(self, list_id: UUID, item_count: int) -> None:
        self.list_id = list_id
        self.item_count = item_count
        super().__init__(
            f"Notification list {list_id} still holds {item_count} item(s)"
        )


class DuplicateNotificationItemError(AdjudicationError):
    """Raised when a case is added twice to the same list."""

    def __init__(self, list_id: UUID, case_id: UUID) -> None:
        self.list_id = list_id
        self.case_id = case_id
        super().__init__(f"Case {case_id} is already on notification list {list_id}")


class NotificationItemLockedError(AdjudicationError):
    """Raised when removing an item that already has delivery attempts."""

    def __init__(self, item_id: UUID) -> None:
        self.item_id = item_id
        super().__init__(
            f"Notification item {item_id} already has delivery attempts"
        )


class MissingRecipientError(AdjudicationError):
    """Raised when a channel that needs a destination gets none."""

    def __init__(self, channel: str, destination: str) -> None:
        self.channel = channel
        super().__init__(f"A destination {destination} is required for channel {channel}")


class AttemptAlreadyConfirmedError(AdjudicationError):
    """Raised when confirming an attempt that is already confirmed."""

    def __init__(self, attempt_id: UUID) -> None:
        self.attempt_id = attempt_id
        super().__init__(f"Notification attempt {attempt_id} is already confirmed")


class AttemptExpiredError(AdjudicationError):
    """Raised when confirming or sending an attempt that has expired."""

    def __init__(self, attempt_id: UUID) -> None:
        self.attempt_id = attempt_id
        super().__init__(
            f"Notification attempt {attempt_id} has expired and cannot be confirmed"
        )
