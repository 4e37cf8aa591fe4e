from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import EventType
from .calendar import CalendarDay

EVENT_TYPE_LABELS = {
    EventType.SUNDAY_MASS: "Sunday Mass",
    EventType.DAILY_MASS: "Daily Mass",
    EventType.MONTHLY_MEETING: "Monthly Meeting",
    EventType.SPECIAL_EVENT: "Special Event",
    EventType.TRAINING: "Training",
    EventType.RETREAT: "Retreat",
}

EVENT_TYPE_LOCATIONS = {
    EventType.SUNDAY_MASS: "Main Altar",
    EventType.DAILY_MASS: "Main Altar",
    EventType.MONTHLY_MEETING: "Parish Hall",
    EventType.TRAINING: "Training Room",
    EventType.RETREAT: "Retreat Center",
}
DEFAULT_LOCATION = "Parish"


@dataclass(frozen=True)
class DayDuties:
    day: int
    duties: tuple[str, ...]


@dataclass(frozen=True)
class MonthDuties:
    year: int
    month: int
    duties: list[DayDuties]

    def by_day(self) -> dict[int, tuple[str, ...]]:
        return {d.day: d.duties for d in self.duties}


@dataclass(frozen=True)
class MonthCalendar:
    year: int
    month: int
    days: list[CalendarDay]


@dataclass(frozen=True)
class ScheduleItem:
    """One line of a member's schedule: a past/future duty or a ministry event."""

    id: str
    title: str
    date: date
    time: Optional[str]
    location: str
    type: str
    status: str
