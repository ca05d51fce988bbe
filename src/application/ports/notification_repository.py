"""Notification list repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.notification import ListType, NotificationItem, NotificationList


class NotificationRepositoryProtocol(Protocol):
    """Protocol for notification list, item and attempt storage."""

    async def add_list(self, notification_list: NotificationList) -> None:
        """Store a new list.

        Raises:
            SequenceConflictError: If the list number is already taken.
        """
        ...

    async def update_list(self, notification_list: NotificationList) -> None:
        """Replace a stored list."""
        ...

    async def get_list(self, list_id: UUID) -> NotificationList | None:
        """Retrieve a list by ID."""
        ...

    async def list_lists(self) -> list[NotificationList]:
        """List all notification lists ordered by number."""
        ...

    async def delete_list(self, list_id: UUID) -> None:
        """Remove a list."""
        ...

    async def add_item(self, item: NotificationItem) -> None:
        """Store a new item.

        Raises:
            DuplicateNotificationItemError: If the case is already on the list.
        """
        ...

    async def update_item(self, item: NotificationItem) -> None:
        """Replace a stored item and its attempts."""
        ...

    async def get_item(self, item_id: UUID) -> NotificationItem | None:
        """Retrieve an item by ID."""
        ...

    async def list_items(self, list_id: UUID) -> list[NotificationItem]:
        """List the items of a list in insertion order."""
        ...

    async def list_all_items(self) -> list[NotificationItem]:
        """List the items of every list."""
        ...

    async def delete_item(self, item_id: UUID) -> None:
        """Remove an item."""
        ...

    async def mark_eligible(self, list_type: ListType, case_id: UUID) -> None:
        """Record a case as awaiting a list of the given type.

        Marking an already eligible case keeps its position.
        """
        ...

    async def discard_eligible(self, list_type: ListType, case_id: UUID) -> None:
        """Forget a case's eligibility for a list type, if recorded."""
        ...

    async def eligible_cases(self, list_type: ListType) -> list[UUID]:
        """Cases awaiting a list of the given type, in arrival order."""
        ...
