from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, EventType
from .model import AttendanceRecord, Occasion


class AttendanceRepository(Protocol):
    """Repository interface for attendance records.

    There is no unique key on (member, occasion); services look a record up
    before deciding to update or insert.
    """

    def find_for_occasion(self, member_id: int, occasion: Occasion) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_in_range(self, member_id: int, event_type: EventType, start: date, end: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_occasion(self, occasion: Occasion) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_type_between(self, event_type: EventType, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_member(
        self, member_id: int, *, start: Optional[date] = None, end: Optional[date] = None
    ) -> Sequence[AttendanceRecord]:
        """Oldest first."""

        raise NotImplementedError

    def create(
        self,
        *,
        member_id: int,
        occasion: Occasion,
        status: AttendanceStatus,
        notes: Optional[str],
        recorded_by: Optional[int],
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        attendance_id: int,
        *,
        status: AttendanceStatus,
        notes: Optional[str],
        recorded_by: Optional[int],
    ) -> bool:
        raise NotImplementedError
