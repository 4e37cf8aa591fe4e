from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from loguru import logger

from ..common.datetime_utils import month_bounds, parse_iso_date
from ..common.validators import require_enum, require_non_empty
from ..core.enums import AttendanceStatus, EventType, MemberStatus, PaymentStatus, ServiceTime
from ..core.exceptions import NotFoundError, ValidationError
from ..core.identity import AdminIdentity, Identity, require_admin
from ..dues.service import DuesService
from ..members.repository import MemberRepository
from .model import AttendanceRecord, MonthlySheetRow, Occasion
from .repository import AttendanceRepository
from .stats import AttendanceSummary, summarize_attendance


@dataclass(frozen=True)
class OccasionReport:
    occasion: Occasion
    records: list[AttendanceRecord]
    summary: AttendanceSummary


@dataclass(frozen=True)
class MonthlySaveResult:
    attendance_saved: int
    dues_recorded: int


def parse_occasion(event_type: str, event_date: str, service_time: Optional[str] = None) -> Occasion:
    return Occasion(
        event_type=require_enum(EventType, require_non_empty(event_type, "Event type"), "Event type"),
        event_date=parse_iso_date(require_non_empty(event_date, "Event date")),
        service_time=require_enum(ServiceTime, service_time, "Service time") if service_time else None,
    )


def _as_amount(value) -> Decimal:
    try:
        return Decimal(str(value or 0))
    except InvalidOperation:
        raise ValidationError("Due amount must be a number")


def sheet_row_from_dict(data: dict) -> MonthlySheetRow:
    member_id = data.get("memberId", data.get("member_id"))
    if member_id is None:
        raise ValidationError("Member is required")
    return MonthlySheetRow(
        member_id=int(member_id),
        present=bool(data.get("present")),
        excused=bool(data.get("excused")),
        excuse_letter=str(data.get("excuseLetter", data.get("excuse_letter")) or ""),
        due_checked=bool(data.get("dueChecked", data.get("due_checked"))),
        due_amount=_as_amount(data.get("dueAmount", data.get("due_amount"))),
    )


class AttendanceService:
    """Use cases: mark attendance per occasion, summarise it, run the monthly meeting sheet."""

    def __init__(self, attendance: AttendanceRepository, members: MemberRepository, dues: DuesService):
        self._attendance = attendance
        self._members = members
        self._dues = dues

    def _upsert(
        self,
        *,
        member_id: int,
        occasion: Occasion,
        status: AttendanceStatus,
        notes: Optional[str],
        admin: AdminIdentity,
        existing: Optional[AttendanceRecord],
    ) -> int:
        if existing:
            self._attendance.update(existing.attendance_id, status=status, notes=notes, recorded_by=admin.user_id)
            return existing.attendance_id
        return self._attendance.create(
            member_id=member_id, occasion=occasion, status=status, notes=notes, recorded_by=admin.user_id
        )

    def mark_attendance(
        self,
        caller: Identity,
        *,
        member_id: int,
        occasion: Occasion,
        status: str,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        admin = require_admin(caller)
        try:
            member = self._members.get_by_id(int(member_id))
        except (TypeError, ValueError):
            raise ValidationError("Member is required")
        if not member:
            raise NotFoundError("Member not found")

        self._upsert(
            member_id=member.member_id,
            occasion=occasion,
            status=require_enum(AttendanceStatus, require_non_empty(status, "Status"), "Status"),
            notes=(notes or "").strip() or None,
            admin=admin,
            existing=self._attendance.find_for_occasion(member.member_id, occasion),
        )
        record = self._attendance.find_for_occasion(member.member_id, occasion)
        if not record:
            raise NotFoundError("Attendance record not found")
        return record

    def mark_occasion(self, caller: Identity, *, occasion: Occasion, entries: Iterable[dict]) -> list[AttendanceRecord]:
        require_admin(caller)
        entries = list(entries)
        if not entries:
            raise ValidationError("Attendance records are required")

        out = []
        for entry in entries:
            if not isinstance(entry, dict):
                raise ValidationError("Each attendance record must be an object")
            try:
                member_id = int(entry.get("memberId", entry.get("member_id")))
            except (TypeError, ValueError):
                raise ValidationError("Member is required")
            out.append(
                self.mark_attendance(
                    caller, member_id=member_id, occasion=occasion, status=entry.get("status", ""), notes=entry.get("notes")
                )
            )
        return out

    def summarize_occasion(self, caller: Identity, occasion: Occasion) -> OccasionReport:
        require_admin(caller)
        records = list(self._attendance.list_for_occasion(occasion))
        total_active = len(self._members.list_members(status=MemberStatus.ACTIVE))
        return OccasionReport(occasion=occasion, records=records, summary=summarize_attendance(records, total_active))

    def get_monthly_meeting(self, caller: Identity, year: int, month: int) -> list[MonthlySheetRow]:
        require_admin(caller)
        start, end = month_bounds(year, month)

        rows = []
        for r in self._attendance.list_by_type_between(EventType.MONTHLY_MEETING, start, end):
            due = self._dues.monthly_payment(r.member_id, year, month)
            paid = due is not None and due.status == PaymentStatus.PAID
            rows.append(
                MonthlySheetRow(
                    member_id=r.member_id,
                    present=r.status == AttendanceStatus.PRESENT,
                    excused=r.status == AttendanceStatus.EXCUSED,
                    excuse_letter=r.notes or "",
                    due_checked=paid,
                    due_amount=due.amount if paid else Decimal("0"),
                )
            )
        return rows

    def save_monthly_meeting(
        self, caller: Identity, year: int, month: int, rows: Iterable[MonthlySheetRow]
    ) -> MonthlySaveResult:
        """Upsert each member's meeting record; collected dues are recorded as PAID."""

        admin = require_admin(caller)
        start, end = month_bounds(year, month)
        occasion = Occasion(EventType.MONTHLY_MEETING, start)

        saved = 0
        dues = 0
        for row in rows:
            if not self._members.get_by_id(row.member_id):
                raise NotFoundError(f"Member {row.member_id} not found")

            self._upsert(
                member_id=row.member_id,
                occasion=occasion,
                status=row.status,
                notes=row.excuse_letter.strip() or None,
                admin=admin,
                existing=self._attendance.find_in_range(row.member_id, EventType.MONTHLY_MEETING, start, end),
            )
            saved += 1

            if row.due_checked and row.due_amount > 0:
                recorded = self._dues.record_monthly_payment(
                    admin_id=admin.user_id, member_id=row.member_id, year=year, month=month, amount=row.due_amount
                )
                if recorded is not None:
                    dues += 1

        logger.info(f"Monthly meeting {year}-{month:02d} saved by admin {admin.user_id}: {saved} records, {dues} dues")
        return MonthlySaveResult(attendance_saved=saved, dues_recorded=dues)
