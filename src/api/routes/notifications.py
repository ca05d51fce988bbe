"""Notification (intimação) API routes."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from src.api.dependencies.adjudication import get_notification_tracker_service
from src.api.models.notification import (
    AddAttemptRequest,
    AddItemRequest,
    AttemptResponse,
    ConfirmAttemptRequest,
    CreateListRequest,
    EligibleCasesResponse,
    ExpireOverdueResponse,
    ItemResponse,
    NotificationListDetailResponse,
    NotificationListResponse,
    NotificationListsResponse,
)
from src.application.services.notification_tracker_service import (
    NotificationTrackerService,
)
from src.domain.models.notification import (
    ListType,
    NotificationAttempt,
    NotificationItem,
    NotificationList,
)

router = APIRouter(prefix="/v1/notification-lists", tags=["notifications"])


def _attempt_response(attempt: NotificationAttempt) -> AttemptResponse:
    return AttemptResponse(
        id=attempt.id,
        attempt_number=attempt.attempt_number,
        channel=attempt.channel.value,
        deadline=attempt.deadline,
        sent_to=attempt.sent_to,
        observations=attempt.observations,
        status=attempt.status.value,
        sent_at=attempt.sent_at,
        confirmed_at=attempt.confirmed_at,
        confirmed_by=attempt.confirmed_by,
    )


def _item_response(item: NotificationItem) -> ItemResponse:
    return ItemResponse(
        id=item.id,
        list_id=item.list_id,
        case_id=item.case_id,
        is_notified=item.is_notified,
        attempts=[_attempt_response(a) for a in item.attempts],
    )


def _list_fields(notification_list: NotificationList) -> dict[str, object]:
    return {
        "id": notification_list.id,
        "number": str(notification_list.number),
        "list_type": notification_list.list_type.value,
        "status": notification_list.status.value,
        "created_at": notification_list.created_at,
        "finalized_at": notification_list.finalized_at,
    }


@router.post(
    "",
    response_model=NotificationListResponse,
    status_code=201,
    summary="Create a notification list",
)
async def create_list(
    request_data: CreateListRequest,
    service: NotificationTrackerService = Depends(get_notification_tracker_service),
) -> NotificationListResponse:
    """Create a list with the next yearly number."""
    notification_list = await service.create_list(request_data.list_type, request_data.year)
    return NotificationListResponse(**_list_fields(notification_list))


@router.get("", response_model=NotificationListsResponse, summary="List notification lists")
async def list_lists(
    service: NotificationTrackerService = Depends(get_notification_tracker_service),
) -> NotificationListsResponse:
    """All lists ordered by number."""
    lists = await service.list_lists()
    return NotificationListsResponse(
        lists=[NotificationListResponse(**_list_fields(nl)) for nl in lists]
    )


@router.get("/eligible", response_model=EligibleCasesResponse, summary="Eligible cases")
async def eligible_cases(
    list_type: ListType = Query(...),
    service: NotificationTrackerService = Depends(get_notification_tracker_service),
) -> EligibleCasesResponse:
    """Cases that became eligible for a list type and are not listed yet."""
    return EligibleCasesResponse(
        list_type=list_type.value,
        case_ids=await service.eligible_cases(list_type),
    )


@router.post(
    "/expire-overdue",
    response_model=ExpireOverdueResponse,
    summary="Expire overdue attempts",
)
async def expire_overdue(
    now: datetime | None = Query(default=None),
    service: NotificationTrackerService = Depends(get_notification_tracker_service),
) -> ExpireOverdueResponse:
    """Expire every open attempt whose deadline has passed."""
    return ExpireOverdueResponse(expired=await service.expire_overdue(now))


@router.get(
    "/{list_id}",
    response_model=NotificationListDetailResponse,
    summary="Get a notification list",
)
async def get_list(
    list_id: UUID,
    service: NotificationTrackerService = Depends(get_notification_tracker_service),
) -> NotificationListDetailResponse:
    """Get a list with its items and attempts."""
    notification_list = await service.get_list(list_id)
    items = await service.list_items(list_id)
    return NotificationListDetailResponse(
        **_list_fields(notification_list),
        items=[_item_response(i) for i in items],
    )


@router.post(
    "/{list_id}/finalize",
    response_model=NotificationListResponse,
    summary="Finalize a list",
)
async def finalize_list(
    list_id: UUID,
    service: NotificationTrackerService = Depends(get_notification_tracker_service),
) -> NotificationListResponse:
    """Close a list to new items and attempts."""
    return NotificationListResponse(**_list_fields(await service.finalize_list(list_id)))


@router.delete(
    "/{list_id}",
    status_code=204,
    response_class=Response,
    summary="Delete an empty list",
)
async def delete_list(
    list_id: UUID,
    service: NotificationTrackerService = Depends(get_notification_tracker_service),
) -> Response:
    """Delete a list without items."""
    await service.delete_list(list_id)
    return Response(status_code=204)


@router.post(
    "/{list_id}/items",
    response_model=ItemResponse,
    status_code=201,
    summary="Add a case to a list",
)
async def add_item(
    list_id: UUID,
    request_data: AddItemRequest,
    service: NotificationTrackerService = Depends(get_notification_tracker_service),
) -> ItemResponse:
    """Put a case on a list (once per list)."""
    return _item_response(await service.add_item(list_id, request_data.case_id))


@router.delete(
    "/{list_id}/items/{item_id}",
    status_code=204,
    response_class=Response,
    summary="Remove an item",
)
async def remove_item(
    list_id: UUID,
    item_id: UUID,
    service: NotificationTrackerService = Depends(get_notification_tracker_service),
) -> Response:
    """Remove an item that has no attempts."""
    await service.remove_item(list_id, item_id)
    return Response(status_code=204)


@router.post(
    "/{list_id}/items/{item_id}/attempts",
    response_model=AttemptResponse,
    status_code=201,
    summary="Record a delivery attempt",
)
async def add_attempt(
    list_id: UUID,
    item_id: UUID,
    request_data: AddAttemptRequest,
    service: NotificationTrackerService = Depends(get_notification_tracker_service),
) -> AttemptResponse:
    """Record a new delivery attempt for an item."""
    attempt = await service.add_attempt(
        list_id,
        item_id,
        request_data.channel,
        deadline=request_data.deadline,
        sent_to=request_data.sent_to,
        observations=request_data.observations,
    )
    return _attempt_response(attempt)


@router.post(
    "/{list_id}/items/{item_id}/attempts/{attempt_id}/sent",
    response_model=AttemptResponse,
    summary="Mark an attempt as sent",
)
async def mark_sent(
    list_id: UUID,
    item_id: UUID,
    attempt_id: UUID,
    service: NotificationTrackerService = Depends(get_notification_tracker_service),
) -> AttemptResponse:
    """Mark a pending attempt as sent."""
    return _attempt_response(await service.mark_sent(list_id, item_id, attempt_id))


@router.post(
    "/{list_id}/items/{item_id}/attempts/{attempt_id}/confirm",
    response_model=AttemptResponse,
    summary="Confirm delivery",
)
async def confirm_attempt(
    list_id: UUID,
    item_id: UUID,
    attempt_id: UUID,
    request_data: ConfirmAttemptRequest,
    service: NotificationTrackerService = Depends(get_notification_tracker_service),
) -> AttemptResponse:
    """Confirm delivery; the item becomes notified."""
    attempt = await service.confirm_attempt(
        list_id, item_id, attempt_id, confirmed_by=request_data.confirmed_by
    )
    return _attempt_response(attempt)
