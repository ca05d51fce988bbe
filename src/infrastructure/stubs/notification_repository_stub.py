"""In-memory stub for NotificationRepositoryProtocol.

Simulates the unique yearly list number and the unique (list_id, case_id)
item constraint, and keeps the per-type eligible cases.
"""

from __future__ import annotations

import asyncio
from uuid import UUID

from src.application.ports.notification_repository import (
    NotificationRepositoryProtocol,
)
from src.domain.errors import (
    DuplicateNotificationItemError,
    NotFoundError,
    SequenceConflictError,
)
from src.domain.models.notification import ListType, NotificationItem, NotificationList
from src.domain.models.sequence_number import SequenceScope


class NotificationRepositoryStub(NotificationRepositoryProtocol):
    """In-memory stub implementation of NotificationRepositoryProtocol.

    Attributes:
        _lists: Dictionary mapping list.id to NotificationList.
        _items: Dictionary mapping item.id to NotificationItem, in insertion order.
        _eligible: Eligible case ids per list type, in arrival order.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._lists: dict[UUID, NotificationList] = {}
        self._items: dict[UUID, NotificationItem] = {}
        self._eligible: dict[ListType, dict[UUID, None]] = {}
        self._lock = asyncio.Lock()

    async def add_list(self, notification_list: NotificationList) -> None:
        """Store a new list, enforcing a unique number."""
        async with self._lock:
            if any(
                existing.number == notification_list.number
                for existing in self._lists.values()
            ):
                raise SequenceConflictError(
                    SequenceScope.NOTIFICATION_LIST.value,
                    notification_list.number.sequence,
                    notification_list.number.year,
                )
            self._lists[notification_list.id] = notification_list

    async def update_list(self, notification_list: NotificationList) -> None:
        """Replace a stored list."""
        async with self._lock:
            if notification_list.id not in self._lists:
                raise NotFoundError("notification list", notification_list.id)
            self._lists[notification_list.id] = notification_list

    async def get_list(self, list_id: UUID) -> NotificationList | None:
        """Retrieve a list by ID."""
        return self._lists.get(list_id)

    async def list_lists(self) -> list[NotificationList]:
        """List all lists ordered by number."""
        return sorted(self._lists.values(), key=lambda nl: nl.number)

    async def delete_list(self, list_id: UUID) -> None:
        """Remove a list."""
        async with self._lock:
            self._lists.pop(list_id, None)

    async def add_item(self, item: NotificationItem) -> None:
        """Store a new item, enforcing one item per case and list."""
        async with self._lock:
            if item.list_id not in self._lists:
                raise NotFoundError("notification list", item.list_id)
            if any(
                i.list_id == item.list_id and i.case_id == item.case_id
                for i in self._items.values()
            ):
                raise DuplicateNotificationItemError(item.list_id, item.case_id)
            self._items[item.id] = item

    async def update_item(self, item: NotificationItem) -> None:
        """Replace a stored item and its attempts."""
        async with self._lock:
            if item.id not in self._items:
                raise NotFoundError("notification item", item.id)
            self._items[item.id] = item

    async def get_item(self, item_id: UUID) -> NotificationItem | None:
        """Retrieve an item by ID."""
        return self._items.get(item_id)

    async def list_items(self, list_id: UUID) -> list[NotificationItem]:
        """List the items of a list in insertion order."""
        return [i for i in self._items.values() if i.list_id == list_id]

    async def list_all_items(self) -> list[NotificationItem]:
        """List the items of every list."""
        return list(self._items.values())

    async def delete_item(self, item_id: UUID) -> None:
        """Remove an item."""
        async with self._lock:
            self._items.pop(item_id, None)

    async def mark_eligible(self, list_type: ListType, case_id: UUID) -> None:
        """Record a case as awaiting a list of the given type."""
        async with self._lock:
            self._eligible.setdefault(list_type, {})[case_id] = None

    async def discard_eligible(self, list_type: ListType, case_id: UUID) -> None:
        """Forget a case's eligibility for a list type."""
        async with self._lock:
            self._eligible.get(list_type, {}).pop(case_id, None)

    async def eligible_cases(self, list_type: ListType) -> list[UUID]:
        """Cases awaiting a list of the given type, in arrival order."""
        return list(self._eligible.get(list_type, {}))

    def clear(self) -> None:
        """Clear all stored lists, items and eligibility (for testing)."""
        self._lists.clear()
        self._items.clear()
        self._eligible.clear()
