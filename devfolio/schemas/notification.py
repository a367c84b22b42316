"""Notification schemas."""

from datetime import datetime

from devfolio.models.enums import NotificationType
from devfolio.schemas.common import CamelModel, ORMModel, UserBrief


class NotificationResponse(ORMModel):
    """Notification as returned by the API and pushed over the channel."""

    id: int
    recipient_id: int
    sender: UserBrief | None = None
    type: NotificationType
    title: str
    message: str
    link: str | None
    is_read: bool
    created_at: datetime


class NotificationListResponse(CamelModel):
    """Page of notifications plus the recipient's unread count."""

    success: bool = True
    data: list[NotificationResponse]
    unread_count: int
