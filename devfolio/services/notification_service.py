"""Notification service: persist notifications and push them to the recipient's channel."""

import logging
from dataclasses import dataclass

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from devfolio.models.enums import NotificationType
from devfolio.models.notification import Notification
from devfolio.schemas.notification import NotificationResponse
from devfolio.services.query import Page, paginate
from devfolio.services.realtime import UserEventType, publish_user_event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationIntent:
    """A request, produced by a resource service, to alert one user."""

    recipient_id: int
    sender_id: int | None
    type: NotificationType
    title: str
    message: str
    link: str | None = None

    @property
    def is_self_addressed(self) -> bool:
        return self.sender_id is not None and self.sender_id == self.recipient_id


class NotificationService:
    """Service for notification persistence, delivery and read state."""

    def __init__(self, db: Session):
        self.db = db

    def notify(self, intent: NotificationIntent | None) -> Notification | None:
        """Persist a notification and push it to the recipient.

        Persistence is committed before the push; a failed push leaves the
        stored notification in place. Self-addressed intents are dropped.
        """
        if intent is None or intent.is_self_addressed:
            return None

        notification = Notification(
            recipient_id=intent.recipient_id,
            sender_id=intent.sender_id,
            type=intent.type.value,
            title=intent.title,
            message=intent.message,
            link=intent.link,
        )
        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)

        payload = NotificationResponse.model_validate(notification).model_dump(
            mode="json", by_alias=True
        )
        if not publish_user_event(intent.recipient_id, UserEventType.NEW_NOTIFICATION, payload):
            logger.warning(
                f"Notification {notification.id} stored but not pushed to user {intent.recipient_id}"
            )
        return notification

    def list_for_user(self, user_id: int, page: int, limit: int) -> tuple[Page, int]:
        """Return a page of the user's notifications (newest first) and the unread count."""
        query = (
            self.db.query(Notification)
            .filter(Notification.recipient_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
        )
        unread = (
            self.db.query(Notification)
            .filter(Notification.recipient_id == user_id, Notification.is_read.is_(False))
            .count()
        )
        return paginate(query, page, limit), unread

    def mark_read(self, notification_id: int, user_id: int) -> Notification:
        """Mark one of the user's notifications as read."""
        notification = (
            self.db.query(Notification)
            .filter(Notification.id == notification_id, Notification.recipient_id == user_id)
            .first()
        )
        if not notification:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found"
            )
        if not notification.is_read:
            notification.is_read = True
            self.db.commit()
            self.db.refresh(notification)
        return notification

    def mark_all_read(self, user_id: int) -> int:
        """Mark all of the user's unread notifications as read; returns how many changed."""
        updated = (
            self.db.query(Notification)
            .filter(Notification.recipient_id == user_id, Notification.is_read.is_(False))
            .update({Notification.is_read: True}, synchronize_session=False)
        )
        self.db.commit()
        return updated
