from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Audience, NewNotification, Notification


class NotificationRepository(Protocol):
    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        raise NotImplementedError

    def list_visible(self, audience: Audience, *, limit: int) -> Sequence[Notification]:
        """Newest first."""

        raise NotImplementedError

    def count_unread(self, audience: Audience) -> int:
        raise NotImplementedError

    def create(self, new: NewNotification) -> int:
        raise NotImplementedError

    def set_read(self, notification_id: int, *, is_read: bool, at: Optional[datetime]) -> bool:
        raise NotImplementedError

    def mark_all_read(self, audience: Audience, *, at: datetime) -> int:
        raise NotImplementedError
