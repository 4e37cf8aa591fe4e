from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_12h, month_bounds, today_local
from ..core.constants import DEFAULT_RECENT_DUTIES_LIMIT, DEFAULT_SCHEDULE_LIMIT, SCHEDULE_LOOKBACK_DAYS
from ..core.enums import EventStatus, EventType
from ..core.identity import Identity, require_member
from ..events.model import MinistryEvent
from ..events.repository import EventRepository
from .calendar import build_month_grid
from .model import (
    DEFAULT_LOCATION,
    EVENT_TYPE_LABELS,
    EVENT_TYPE_LOCATIONS,
    DayDuties,
    MonthCalendar,
    MonthDuties,
    ScheduleItem,
)

_WITH_SERVICE_TIME = (EventType.SUNDAY_MASS, EventType.DAILY_MASS)


def duty_label(record: AttendanceRecord) -> str:
    label = EVENT_TYPE_LABELS.get(record.event_type, record.event_type.value)
    if record.event_type in _WITH_SERVICE_TIME:
        return f"{label} {record.service_time.value if record.service_time else 'AM'}"
    return label


def event_label(event: MinistryEvent) -> str:
    return f"{event.title} - {format_12h(event.event_time)}"


def event_status_label(event: MinistryEvent, today: date) -> str:
    if event.status == EventStatus.CANCELLED:
        return "cancelled"
    if event.status == EventStatus.COMPLETED or event.event_date < today:
        return "completed"
    return "upcoming"


class ScheduleService:
    """Use cases: a member's duties, month calendar and upcoming schedule."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        events: EventRepository,
        *,
        clock: Callable[[], date] = today_local,
    ):
        self._attendance = attendance
        self._events = events
        self._clock = clock

    def _resolve_month(self, year: Optional[int], month: Optional[int]) -> tuple[int, int]:
        today = self._clock()
        return int(year or today.year), int(month or today.month)

    def duties_for_month(self, caller: Identity, year: Optional[int] = None, month: Optional[int] = None) -> MonthDuties:
        me = require_member(caller)
        year, month = self._resolve_month(year, month)
        start, end = month_bounds(year, month)

        by_day: dict[int, list[str]] = {}
        for r in self._attendance.list_for_member(me.user_id, start=start, end=end):
            by_day.setdefault(r.event_date.day, []).append(duty_label(r))
        for e in self._events.list_events(start=start, end=end):
            by_day.setdefault(e.event_date.day, []).append(event_label(e))

        duties = [DayDuties(day=day, duties=tuple(items)) for day, items in sorted(by_day.items())]
        return MonthDuties(year=year, month=month, duties=duties)

    def calendar(self, caller: Identity, year: Optional[int] = None, month: Optional[int] = None) -> MonthCalendar:
        duties = self.duties_for_month(caller, year, month)
        return MonthCalendar(
            year=duties.year,
            month=duties.month,
            days=build_month_grid(duties.year, duties.month, duties.by_day()),
        )

    def upcoming_schedule(self, caller: Identity, *, limit: int = DEFAULT_SCHEDULE_LIMIT) -> list[ScheduleItem]:
        me = require_member(caller)
        today = self._clock()

        recent = list(self._attendance.list_for_member(me.user_id))[-DEFAULT_RECENT_DUTIES_LIMIT:]
        items = [
            ScheduleItem(
                id=f"attendance-{r.attendance_id}",
                title=f"{EVENT_TYPE_LABELS.get(r.event_type, r.event_type.value)} - {r.status.value}",
                date=r.event_date,
                time=r.service_time.value if r.service_time else None,
                location=EVENT_TYPE_LOCATIONS.get(r.event_type, DEFAULT_LOCATION),
                type="duty",
                status="completed" if r.event_date < today else "upcoming",
            )
            for r in recent
        ]

        events = self._events.list_events(
            start=today - timedelta(days=SCHEDULE_LOOKBACK_DAYS), limit=DEFAULT_RECENT_DUTIES_LIMIT
        )
        items += [
            ScheduleItem(
                id=f"ministry-{e.event_id}",
                title=e.title,
                date=e.event_date,
                time=e.event_time,
                location=e.location or DEFAULT_LOCATION,
                type="event",
                status=event_status_label(e, today),
            )
            for e in events
        ]

        items.sort(key=lambda i: i.date)
        return items[:limit]
