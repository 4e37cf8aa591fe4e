"""Per-occasion attendance tallies."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


@dataclass(frozen=True)
class AttendanceSummary:
    present: int
    late: int
    absent: int
    excused: int
    unmarked: int
    total_active: int
    rate: int


def attendance_rate(present: int, late: int, total_active: int) -> int:
    """Share of active members who showed up (late counts), as a whole percent.

    Rounds half up; zero active members gives 0.
    """

    if total_active <= 0:
        return 0
    pct = Decimal(present + late) * 100 / Decimal(total_active)
    return int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def summarize_attendance(records: Iterable[AttendanceRecord], total_active: int) -> AttendanceSummary:
    counts = {s: 0 for s in AttendanceStatus}
    marked = 0
    for r in records:
        counts[r.status] += 1
        marked += 1

    present = counts[AttendanceStatus.PRESENT]
    late = counts[AttendanceStatus.LATE]
    return AttendanceSummary(
        present=present,
        late=late,
        absent=counts[AttendanceStatus.ABSENT],
        excused=counts[AttendanceStatus.EXCUSED],
        unmarked=max(total_active - marked, 0),
        total_active=total_active,
        rate=attendance_rate(present, late, total_active),
    )
