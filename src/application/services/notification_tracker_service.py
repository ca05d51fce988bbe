"""Notification Tracker Service.

Tracks the notification (intimação) of parties through numbered lists.
Judged cases become eligible for SESSION lists and published decisions
for DECISION lists. Eligibility is fed by the judgment events and kept
in the notification repository until the case is placed on a list of
that type; removing the item makes the case eligible again.

Developer Golden Rules:
1. Lists are numbered per year (pad 3) from the sequence allocator
2. A finalized list accepts no items and no attempts
3. Attempt mutations run under the item lock
4. Attempts are never deleted; items with attempts are never removed
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from uuid6 import uuid7

from src.application.ports.aggregate_lock import AggregateLockProtocol
from src.application.ports.notification_repository import (
    NotificationRepositoryProtocol,
)
from src.application.ports.sequence_allocator import SequenceAllocatorProtocol
from src.application.services.base import LoggingMixin, retry_on_sequence_conflict
from src.config.adjudication_config import DEFAULT_ADJUDICATION_CONFIG, AdjudicationConfig
from src.domain.errors import (
    MissingRecipientError,
    NotFoundError,
    NotificationItemLockedError,
    NotificationListNotEmptyError,
)
from src.domain.events.judgment import CaseJudgedEvent, DecisionPublishedEvent
from src.domain.models.notification import (
    AttemptStatus,
    Channel,
    ListType,
    NotificationAttempt,
    NotificationItem,
    NotificationList,
)
from src.domain.models.sequence_number import SequenceNumber, SequenceScope

EVENT_FED_LIST_TYPES = frozenset({ListType.SESSION, ListType.DECISION})


class NotificationTrackerService(LoggingMixin):
    """Service managing notification lists, items and attempts.

    Attributes:
        _notifications: Notification repository.
        _sequences: Year-scoped sequence allocator.
        _lock: Per item lock.
        _config: Core configuration.
    """

    def __init__(
        self,
        notification_repository: NotificationRepositoryProtocol,
        sequence_allocator: SequenceAllocatorProtocol,
        aggregate_lock: AggregateLockProtocol,
        config: AdjudicationConfig | None = None,
    ) -> None:
        self._notifications = notification_repository
        self._sequences = sequence_allocator
        self._lock = aggregate_lock
        self._config = config or DEFAULT_ADJUDICATION_CONFIG
        self._init_logger()

    # Event handlers

    async def on_case_judged(self, event: CaseJudgedEvent) -> None:
        """Make a judged case eligible for SESSION lists."""
        await self._mark_eligible(ListType.SESSION, event.case_id)
        self._log_operation("on_case_judged", case_id=str(event.case_id)).debug(
            "case_eligible_for_notification", list_type=ListType.SESSION.value
        )

    async def on_decision_published(self, event: DecisionPublishedEvent) -> None:
        """Make a case with a published decision eligible for DECISION lists.

        A republication does not make an already listed case eligible again.
        """
        await self._mark_eligible(ListType.DECISION, event.case_id)
        self._log_operation(
            "on_decision_published", case_id=str(event.case_id)
        ).debug(
            "case_eligible_for_notification",
            list_type=ListType.DECISION.value,
            publication_order=event.publication_order,
        )

    async def eligible_cases(self, list_type: ListType) -> list[UUID]:
        """Eligible cases not yet placed on a list of the given type.

        Types without an event feed have no eligible set.
        """
        return await self._notifications.eligible_cases(list_type)

    # Lists

    async def create_list(
        self, list_type: ListType, year: int | None = None
    ) -> NotificationList:
        """Create a numbered notification list.

        Raises:
            SequenceConflictError: Numbering kept colliding after retries.
        """
        list_year = year or datetime.now(timezone.utc).year
        log = self._log_operation(
            "create_list", list_type=list_type.value, year=list_year
        )

        async def attempt() -> NotificationList:
            sequence = await self._sequences.next_value(
                SequenceScope.NOTIFICATION_LIST, list_year
            )
            notification_list = NotificationList(
                id=uuid7(),
                number=SequenceNumber.for_scope(
                    SequenceScope.NOTIFICATION_LIST, sequence, list_year
                ),
                list_type=list_type,
            )
            await self._notifications.add_list(notification_list)
            return notification_list

        notification_list = await retry_on_sequence_conflict(
            attempt, self._config.sequence_max_retries, log
        )
        log.info(
            "notification_list_created",
            list_id=str(notification_list.id),
            number=str(notification_list.number),
        )
        return notification_list

    async def finalize_list(self, list_id: UUID) -> NotificationList:
        """Close a list to new items and attempts.

        Raises:
            NotFoundError: Unknown list.
            NotificationListFinalizedError: Already finalized.
        """
        notification_list = await self.get_list(list_id)
        finalized = notification_list.finalized()
        await self._notifications.update_list(finalized)
        self._log_operation("finalize_list", list_id=str(list_id)).info(
            "notification_list_finalized"
        )
        return finalized

    async def delete_list(self, list_id: UUID) -> None:
        """Delete an empty list. Its number is not released.

        Raises:
            NotFoundError: Unknown list.
            NotificationListNotEmptyError: The list still has items.
        """
        await self.get_list(list_id)
        items = await self._notifications.list_items(list_id)
        if items:
            raise NotificationListNotEmptyError(list_id, len(items))
        await self._notifications.delete_list(list_id)
        self._log_operation("delete_list", list_id=str(list_id)).info(
            "notification_list_deleted"
        )

    async def get_list(self, list_id: UUID) -> NotificationList:
        """Retrieve a list.

        Raises:
            NotFoundError: If the list does not exist.
        """
        notification_list = await self._notifications.get_list(list_id)
        if notification_list is None:
            raise NotFoundError("notification list", list_id)
        return notification_list

    async def list_lists(self) -> list[NotificationList]:
        """All lists ordered by number."""
        return await self._notifications.list_lists()

    # Items

    async def add_item(self, list_id: UUID, case_id: UUID) -> NotificationItem:
        """Put a case on a list.

        Raises:
            NotFoundError: Unknown list.
            NotificationListFinalizedError: The list is finalized.
            DuplicateNotificationItemError: The case is already on the list.
        """
        notification_list = await self.get_list(list_id)
        notification_list.ensure_open()
        item = NotificationItem(id=uuid7(), list_id=list_id, case_id=case_id)
        await self._notifications.add_item(item)
        await self._notifications.discard_eligible(
            notification_list.list_type, case_id
        )
        self._log_operation("add_item", list_id=str(list_id)).info(
            "notification_item_added", item_id=str(item.id), case_id=str(case_id)
        )
        return item

    async def remove_item(self, list_id: UUID, item_id: UUID) -> None:
        """Remove an item that has no attempts.

        A case removed from a SESSION or DECISION list becomes eligible again.

        Raises:
            NotFoundError: Unknown list or item.
            NotificationListFinalizedError: The list is finalized.
            NotificationItemLockedError: The item already has attempts.
        """
        notification_list = await self.get_list(list_id)
        notification_list.ensure_open()
        async with self._lock.hold(item_id):
            item = await self._get_item(list_id, item_id)
            if item.attempts:
                raise NotificationItemLockedError(item_id)
            await self._notifications.delete_item(item_id)
        if notification_list.list_type in EVENT_FED_LIST_TYPES:
            await self._mark_eligible(notification_list.list_type, item.case_id)
        self._log_operation("remove_item", list_id=str(list_id)).info(
            "notification_item_removed", item_id=str(item_id)
        )

    async def list_items(self, list_id: UUID) -> list[NotificationItem]:
        """Items of a list in insertion order.

        Raises:
            NotFoundError: Unknown list.
        """
        await self.get_list(list_id)
        return await self._notifications.list_items(list_id)

    # Attempts

    async def add_attempt(
        self,
        list_id: UUID,
        item_id: UUID,
        channel: Channel,
        deadline: datetime | None = None,
        sent_to: str | None = None,
        observations: str | None = None,
    ) -> NotificationAttempt:
        """Record a new delivery attempt for an item.

        When no deadline is given the configured default applies.

        Args:
            list_id: Owning list.
            item_id: Notified item.
            channel: Delivery channel.
            deadline: When the attempt expires unconfirmed.
            sent_to: Destination; required for addressed channels.
            observations: Free notes.

        Returns:
            The new PENDING attempt.

        Raises:
            NotFoundError: Unknown list or item.
            NotificationListFinalizedError: The list is finalized.
            MissingRecipientError: Addressed channel without destination.
        """
        destination = sent_to.strip() if sent_to else None
        if channel.requires_destination and not destination:
            raise MissingRecipientError(channel.value, channel.destination_label)
        log = self._log_operation(
            "add_attempt", item_id=str(item_id), channel=channel.value
        )
        notification_list = await self.get_list(list_id)
        notification_list.ensure_open()

        default_deadline = self._config.notification_default_deadline
        if deadline is None and default_deadline is not None:
            deadline = datetime.now(timezone.utc) + default_deadline

        async with self._lock.hold(item_id):
            item = await self._get_item(list_id, item_id)
            attempt = NotificationAttempt(
                id=uuid7(),
                attempt_number=item.next_attempt_number,
                channel=channel,
                deadline=deadline,
                sent_to=destination,
                observations=observations,
            )
            await self._notifications.update_item(item.with_attempt(attempt))

        log.info(
            "notification_attempt_added",
            attempt_id=str(attempt.id),
            attempt_number=attempt.attempt_number,
        )
        return attempt

    async def mark_sent(
        self, list_id: UUID, item_id: UUID, attempt_id: UUID
    ) -> NotificationAttempt:
        """Mark a pending attempt as sent."""
        return await self._transition_attempt(
            list_id, item_id, attempt_id, AttemptStatus.SENT
        )

    async def confirm_attempt(
        self,
        list_id: UUID,
        item_id: UUID,
        attempt_id: UUID,
        confirmed_by: str | None = None,
    ) -> NotificationAttempt:
        """Confirm delivery of an attempt; the item becomes notified.

        Raises:
            AttemptAlreadyConfirmedError: Already confirmed.
            AttemptExpiredError: The attempt expired.
        """
        return await self._transition_attempt(
            list_id, item_id, attempt_id, AttemptStatus.CONFIRMED, confirmed_by
        )

    async def expire_overdue(self, now: datetime | None = None) -> int:
        """Expire every open attempt whose deadline has passed.

        Returns:
            Number of attempts expired.
        """
        moment = now or datetime.now(timezone.utc)
        expired = 0
        for candidate in await self._notifications.list_all_items():
            if not any(a.is_overdue(moment) for a in candidate.attempts):
                continue
            async with self._lock.hold(candidate.id):
                item = await self._notifications.get_item(candidate.id)
                if item is None:
                    continue
                updated = item
                for attempt in item.attempts:
                    if attempt.is_overdue(moment):
                        updated = updated.with_replaced_attempt(
                            attempt.with_status(AttemptStatus.EXPIRED, at=moment)
                        )
                        expired += 1
                if updated is not item:
                    await self._notifications.update_item(updated)
        self._log_operation("expire_overdue").info(
            "notification_attempts_expired", count=expired
        )
        return expired

    async def get_item(self, list_id: UUID, item_id: UUID) -> NotificationItem:
        """Retrieve an item of a list.

        Raises:
            NotFoundError: Unknown item, or item of another list.
        """
        return await self._get_item(list_id, item_id)

    async def _transition_attempt(
        self,
        list_id: UUID,
        item_id: UUID,
        attempt_id: UUID,
        new_status: AttemptStatus,
        confirmed_by: str | None = None,
    ) -> NotificationAttempt:
        log = self._log_operation(
            "transition_attempt",
            attempt_id=str(attempt_id),
            to=new_status.value,
        )
        await self.get_list(list_id)
        async with self._lock.hold(item_id):
            item = await self._get_item(list_id, item_id)
            attempt = item.find_attempt(attempt_id)
            if attempt is None:
                raise NotFoundError("notification attempt", attempt_id)
            updated = attempt.with_status(new_status, confirmed_by=confirmed_by)
            await self._notifications.update_item(item.with_replaced_attempt(updated))
        log.info("notification_attempt_transitioned", from_status=attempt.status.value)
        return updated

    async def _get_item(self, list_id: UUID, item_id: UUID) -> NotificationItem:
        item = await self._notifications.get_item(item_id)
        if item is None or item.list_id != list_id:
            raise NotFoundError("notification item", item_id)
        return item

    async def _mark_eligible(self, list_type: ListType, case_id: UUID) -> None:
        for notification_list in await self._notifications.list_lists():
            if notification_list.list_type is not list_type:
                continue
            items = await self._notifications.list_items(notification_list.id)
            if any(item.case_id == case_id for item in items):
                return
        await self._notifications.mark_eligible(list_type, case_id)
