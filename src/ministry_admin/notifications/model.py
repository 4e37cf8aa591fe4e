from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import NotificationType, Priority, TargetType


@dataclass(frozen=True)
class Audience:
    """Which notifications a caller may see.

    Everyone sees ALL_MEMBERS; admins also see ADMINS_ONLY; a member also
    sees SPECIFIC_MEMBER notifications addressed to them.
    """

    admins: bool
    member_id: Optional[int] = None

    def can_see(self, notification: "Notification") -> bool:
        t = notification.target_type
        if t == TargetType.ALL_MEMBERS:
            return True
        if t == TargetType.ADMINS_ONLY:
            return self.admins
        return self.member_id is not None and notification.target_id == self.member_id


@dataclass(frozen=True)
class Notification:
    notification_id: int
    title: str
    message: str
    notification_type: NotificationType
    target_type: TargetType
    priority: Priority
    created_at: datetime
    is_read: bool = False
    target_id: Optional[int] = None
    read_at: Optional[datetime] = None
    scheduled_for: Optional[datetime] = None
    sent_at: Optional[datetime] = None


@dataclass(frozen=True)
class NewNotification:
    title: str
    message: str
    notification_type: NotificationType
    target_type: TargetType = TargetType.ALL_MEMBERS
    target_id: Optional[int] = None
    priority: Priority = Priority.NORMAL
    scheduled_for: Optional[datetime] = None
    sent_at: Optional[datetime] = None
