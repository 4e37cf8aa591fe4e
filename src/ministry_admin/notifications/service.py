from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from loguru import logger

from ..common.datetime_utils import now_local
from ..common.validators import require_enum, require_non_empty
from ..core.constants import DEFAULT_NOTIFICATION_LIMIT
from ..core.enums import NotificationType, Priority, TargetType
from ..core.exceptions import NotFoundError, ValidationError
from ..core.identity import AdminIdentity, Identity, require_admin, require_authenticated
from .model import Audience, NewNotification, Notification
from .repository import NotificationRepository


def audience_for(caller: Identity) -> Audience:
    if isinstance(caller, AdminIdentity):
        return Audience(admins=True)
    return Audience(admins=False, member_id=caller.user_id)


class NotificationService:
    """Use cases: post typed notifications and read the caller's feed."""

    def __init__(self, notifications: NotificationRepository, *, clock: Callable[[], datetime] = now_local):
        self._notifications = notifications
        self._clock = clock

    def create(self, new: NewNotification) -> Notification:
        if new.target_type == TargetType.SPECIFIC_MEMBER and new.target_id is None:
            raise ValidationError("Target member is required")
        if new.scheduled_for is None and new.sent_at is None:
            new = replace(new, sent_at=self._clock())

        notification_id = self._notifications.create(new)
        created = self._notifications.get_by_id(notification_id)
        if not created:
            raise NotFoundError("Notification not found")
        return created

    def announce(
        self,
        caller: Identity,
        *,
        title: str,
        message: str,
        priority: Optional[str] = None,
        target_type: Optional[str] = None,
        target_id: Optional[int] = None,
    ) -> Notification:
        admin = require_admin(caller)
        notification = self.create(
            NewNotification(
                title=require_non_empty(title, "Title"),
                message=require_non_empty(message, "Message"),
                notification_type=NotificationType.ANNOUNCEMENT,
                target_type=require_enum(TargetType, target_type, "Target type") if target_type else TargetType.ALL_MEMBERS,
                target_id=int(target_id) if target_id is not None else None,
                priority=require_enum(Priority, priority, "Priority") if priority else Priority.NORMAL,
            )
        )
        logger.info(f"Announcement {notification.notification_id} posted by admin {admin.user_id}")
        return notification

    def notify_birthday(self, member_name: str) -> Notification:
        return self.create(
            NewNotification(
                title="Birthday Reminder",
                message=f"Birthday of {member_name}",
                notification_type=NotificationType.BIRTHDAY,
            )
        )

    def notify_event(self, title: str, event_date: str, event_time: str) -> Notification:
        return self.create(
            NewNotification(
                title="Event Reminder",
                message=f"{title} on {event_date} at {event_time}",
                notification_type=NotificationType.EVENT_REMINDER,
                priority=Priority.HIGH,
            )
        )

    def notify_dues(self, member_id: int, amount: Decimal) -> Notification:
        return self.create(
            NewNotification(
                title="Dues Reminder",
                message=f"You have pending dues of ₱{amount:.2f}",
                notification_type=NotificationType.DUES_REMINDER,
                target_type=TargetType.SPECIFIC_MEMBER,
                target_id=int(member_id),
            )
        )

    def notify_schedule_change(self, title: str, message: str) -> Notification:
        return self.create(
            NewNotification(
                title=title,
                message=message,
                notification_type=NotificationType.SCHEDULE_CHANGE,
                priority=Priority.HIGH,
            )
        )

    def list_for(self, caller: Identity, *, limit: int = DEFAULT_NOTIFICATION_LIMIT) -> list[Notification]:
        caller = require_authenticated(caller)
        limit = max(1, min(int(limit), DEFAULT_NOTIFICATION_LIMIT))
        return list(self._notifications.list_visible(audience_for(caller), limit=limit))

    def set_read(self, caller: Identity, notification_id: int, *, is_read: bool = True) -> Notification:
        caller = require_authenticated(caller)
        notification = self._notifications.get_by_id(int(notification_id))
        if not notification or not audience_for(caller).can_see(notification):
            raise NotFoundError("Notification not found")

        self._notifications.set_read(notification.notification_id, is_read=is_read, at=self._clock())
        updated = self._notifications.get_by_id(notification.notification_id)
        if not updated:
            raise NotFoundError("Notification not found")
        return updated

    def mark_all_read(self, caller: Identity) -> int:
        caller = require_authenticated(caller)
        return self._notifications.mark_all_read(audience_for(caller), at=self._clock())

    def unread_count(self, caller: Identity) -> int:
        caller = require_authenticated(caller)
        return self._notifications.count_unread(audience_for(caller))
