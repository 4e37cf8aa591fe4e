from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import EventStatus


@dataclass(frozen=True)
class MinistryEvent:
    """Domain entity: a scheduled ministry occasion.

    ``event_time`` is kept as the "HH:MM" string the admin entered;
    ``year`` always mirrors ``event_date``.
    """

    event_id: int
    title: str
    event_date: date
    event_time: str
    conductor: str
    purpose: str
    year: int
    status: EventStatus = EventStatus.SCHEDULED
    location: Optional[str] = None
    created_by: Optional[int] = None
    created_by_name: Optional[str] = None


@dataclass(frozen=True)
class NewEvent:
    title: str
    event_date: date
    event_time: str
    conductor: str
    purpose: str
    location: Optional[str] = None
    created_by: Optional[int] = None


@dataclass(frozen=True)
class EventChanges:
    title: Optional[str] = None
    event_date: Optional[date] = None
    event_time: Optional[str] = None
    conductor: Optional[str] = None
    purpose: Optional[str] = None
    location: Optional[str] = None
    status: Optional[EventStatus] = None

    def as_columns(self) -> dict:
        values = {
            "title": self.title,
            "event_date": self.event_date,
            "event_year": self.event_date.year if self.event_date else None,
            "event_time": self.event_time,
            "conductor": self.conductor,
            "purpose": self.purpose,
            "location": self.location,
            "status": self.status.value if self.status else None,
        }
        return {k: v for k, v in values.items() if v is not None}
