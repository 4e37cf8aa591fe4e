from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import EventStatus
from .model import EventChanges, MinistryEvent, NewEvent


class EventRepository(Protocol):
    def get_by_id(self, event_id: int) -> Optional[MinistryEvent]:
        raise NotImplementedError

    def list_events(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[EventStatus] = None,
        limit: Optional[int] = None,
    ) -> Sequence[MinistryEvent]:
        """Ordered by date then time, earliest first."""

        raise NotImplementedError

    def create(self, new: NewEvent) -> int:
        raise NotImplementedError

    def update(self, event_id: int, changes: EventChanges) -> bool:
        raise NotImplementedError
