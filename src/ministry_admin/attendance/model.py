from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus, EventType, ServiceTime


@dataclass(frozen=True)
class Occasion:
    """What attendance is recorded against: (event type, date, optional AM/PM)."""

    event_type: EventType
    event_date: date
    service_time: Optional[ServiceTime] = None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one member's attendance at one occasion."""

    attendance_id: int
    member_id: int
    event_type: EventType
    event_date: date
    status: AttendanceStatus
    service_time: Optional[ServiceTime] = None
    notes: Optional[str] = None
    recorded_by: Optional[int] = None
    member_name: Optional[str] = None

    @property
    def occasion(self) -> Occasion:
        return Occasion(self.event_type, self.event_date, self.service_time)


@dataclass(frozen=True)
class MonthlySheetRow:
    """One member's line on the monthly meeting sheet."""

    member_id: int
    present: bool = False
    excused: bool = False
    excuse_letter: str = ""
    due_checked: bool = False
    due_amount: Decimal = Decimal("0")

    @property
    def status(self) -> AttendanceStatus:
        if self.present:
            return AttendanceStatus.PRESENT
        if self.excused:
            return AttendanceStatus.EXCUSED
        return AttendanceStatus.ABSENT

    @property
    def absent(self) -> bool:
        return self.status == AttendanceStatus.ABSENT
