"""Notification API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from devfolio.api.dependencies import CurrentUser, LimitParam, PageParam, get_notification_service
from devfolio.schemas.common import DataResponse, MessageResponse
from devfolio.schemas.notification import NotificationListResponse, NotificationResponse
from devfolio.services.notification_service import NotificationService

router = APIRouter(prefix="/api/notifications", tags=["notifications"])

Service = Annotated[NotificationService, Depends(get_notification_service)]


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    current_user: CurrentUser,
    service: Service,
    page: PageParam = 1,
    limit: LimitParam = 20,
):
    """List the caller's notifications, newest first, with the unread count."""
    result, unread = service.list_for_user(current_user.id, page, limit)
    return NotificationListResponse(
        data=[NotificationResponse.model_validate(n) for n in result.items],
        unread_count=unread,
    )


@router.put("/read-all", response_model=MessageResponse)
async def mark_all_notifications_read(current_user: CurrentUser, service: Service):
    """Mark all of the caller's notifications as read."""
    service.mark_all_read(current_user.id)
    return MessageResponse(message="All notifications marked as read")


@router.put("/{notification_id}/read", response_model=DataResponse[NotificationResponse])
async def mark_notification_read(notification_id: int, current_user: CurrentUser, service: Service):
    """Mark one of the caller's notifications as read."""
    notification = service.mark_read(notification_id, current_user.id)
    return DataResponse(data=NotificationResponse.model_validate(notification))
