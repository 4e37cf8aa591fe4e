"""Month calendar grid: six Sunday-first weeks."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import timedelta
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import month_bounds
from ..core.constants import CALENDAR_CELLS


@dataclass(frozen=True)
class CalendarDay:
    day: int
    is_current_month: bool
    has_duty: bool = False
    duties: tuple[str, ...] = ()


def leading_offset(year: int, month: int) -> int:
    """Cells before the 1st when weeks start on Sunday."""

    monday_based = calendar.monthrange(year, month)[0]
    return (monday_based + 1) % 7


def build_month_grid(
    year: int, month: int, duties_by_day: Optional[Mapping[int, Sequence[str]]] = None
) -> list[CalendarDay]:
    """42 cells: tail of the previous month, the month itself, head of the next.

    Only current-month cells carry duties.
    """

    duties_by_day = duties_by_day or {}
    first, _ = month_bounds(year, month)
    start = first - timedelta(days=leading_offset(year, month))

    cells = []
    for i in range(CALENDAR_CELLS):
        d = start + timedelta(days=i)
        if d.month == month and d.year == year:
            duties = tuple(duties_by_day.get(d.day, ()))
            cells.append(CalendarDay(day=d.day, is_current_month=True, has_duty=bool(duties), duties=duties))
        else:
            cells.append(CalendarDay(day=d.day, is_current_month=False))
    return cells
