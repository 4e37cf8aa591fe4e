from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from ministry_admin.attendance.model import MonthlySheetRow, Occasion
from ministry_admin.attendance.service import parse_occasion, sheet_row_from_dict
from ministry_admin.core.enums import AttendanceStatus, EventType, MemberStatus, PaymentStatus, ServiceTime
from ministry_admin.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ministry_admin.core.identity import MemberIdentity

SUNDAY_AM = Occasion(EventType.SUNDAY_MASS, date(2026, 10, 18), ServiceTime.AM)


def test_parse_occasion():
    occasion = parse_occasion("sunday_mass", "2026-10-18", "am")
    assert occasion == SUNDAY_AM
    assert parse_occasion("MONTHLY_MEETING", "2026-10-01").service_time is None
    with pytest.raises(ValidationError):
        parse_occasion("BINGO_NIGHT", "2026-10-18")
    with pytest.raises(ValidationError):
        parse_occasion("SUNDAY_MASS", "")


def test_mark_attendance_is_one_record_per_occasion(container, repos, admin):
    m = repos.members.add()
    svc = container.attendance_service

    first = svc.mark_attendance(admin, member_id=m.member_id, occasion=SUNDAY_AM, status="late")
    second = svc.mark_attendance(admin, member_id=m.member_id, occasion=SUNDAY_AM, status="present", notes=" ok ")

    assert first.attendance_id == second.attendance_id
    assert second.status == AttendanceStatus.PRESENT
    assert second.notes == "ok"
    assert second.recorded_by == admin.user_id
    assert len(repos.attendance.rows) == 1

    pm = Occasion(EventType.SUNDAY_MASS, date(2026, 10, 18), ServiceTime.PM)
    svc.mark_attendance(admin, member_id=m.member_id, occasion=pm, status="absent")
    assert len(repos.attendance.rows) == 2


def test_mark_attendance_rejects_unknown_member_and_status(container, repos, admin):
    m = repos.members.add()
    with pytest.raises(NotFoundError):
        container.attendance_service.mark_attendance(admin, member_id=999, occasion=SUNDAY_AM, status="PRESENT")
    with pytest.raises(ValidationError):
        container.attendance_service.mark_attendance(admin, member_id=m.member_id, occasion=SUNDAY_AM, status="ASLEEP")
    with pytest.raises(AuthorizationError):
        container.attendance_service.mark_attendance(
            MemberIdentity(m.member_id, m.full_name, m.email), member_id=m.member_id, occasion=SUNDAY_AM, status="PRESENT"
        )


def test_summarize_occasion(container, repos, admin):
    members = [repos.members.add() for _ in range(5)]
    repos.members.add(status=MemberStatus.INACTIVE)
    container.attendance_service.mark_occasion(
        admin,
        occasion=SUNDAY_AM,
        entries=[
            {"memberId": members[0].member_id, "status": "PRESENT"},
            {"memberId": members[1].member_id, "status": "LATE"},
            {"member_id": members[2].member_id, "status": "EXCUSED"},
        ],
    )

    report = container.attendance_service.summarize_occasion(admin, SUNDAY_AM)

    s = report.summary
    assert (s.present, s.late, s.excused, s.absent, s.unmarked) == (1, 1, 1, 0, 2)
    assert s.total_active == 5
    assert s.rate == 40
    assert {r.member_name for r in report.records} == {members[i].full_name for i in range(3)}


def test_mark_occasion_requires_entries(container, admin):
    with pytest.raises(ValidationError):
        container.attendance_service.mark_occasion(admin, occasion=SUNDAY_AM, entries=[])


def test_mark_occasion_rejects_malformed_entries(container, repos, admin):
    svc = container.attendance_service
    for entries in ([{"memberId": "abc", "status": "PRESENT"}], [{"status": "PRESENT"}], ["not-a-record"]):
        with pytest.raises(ValidationError):
            svc.mark_occasion(admin, occasion=SUNDAY_AM, entries=entries)
    with pytest.raises(ValidationError, match="Member is required"):
        svc.mark_attendance(admin, member_id="abc", occasion=SUNDAY_AM, status="PRESENT")
    assert repos.attendance.rows == {}


def test_sheet_row_from_dict_accepts_both_key_styles():
    row = sheet_row_from_dict({"memberId": "3", "present": True, "dueChecked": True, "dueAmount": "25"})
    assert row == MonthlySheetRow(3, present=True, due_checked=True, due_amount=Decimal("25"))

    row = sheet_row_from_dict({"member_id": 4, "excused": 1, "excuse_letter": "Sick"})
    assert row.status == AttendanceStatus.EXCUSED
    assert row.excuse_letter == "Sick"

    with pytest.raises(ValidationError):
        sheet_row_from_dict({"present": True})
    with pytest.raises(ValidationError):
        sheet_row_from_dict({"memberId": 1, "dueAmount": "lots"})


def test_monthly_meeting_save_and_reload(container, repos, admin):
    ana = repos.members.add(given_name="Ana")
    ben = repos.members.add(given_name="Ben")
    carl = repos.members.add(given_name="Carl")
    svc = container.attendance_service

    result = svc.save_monthly_meeting(
        admin,
        2026,
        10,
        [
            MonthlySheetRow(ana.member_id, present=True, due_checked=True, due_amount=Decimal("50")),
            MonthlySheetRow(ben.member_id, excused=True, excuse_letter="Out of town"),
            MonthlySheetRow(carl.member_id, due_checked=True, due_amount=Decimal("0")),
        ],
    )

    assert (result.attendance_saved, result.dues_recorded) == (3, 1)
    records = {r.member_id: r for r in repos.attendance.rows.values()}
    assert records[ana.member_id].event_date == date(2026, 10, 1)
    assert records[ana.member_id].event_type == EventType.MONTHLY_MEETING
    assert records[ben.member_id].notes == "Out of town"
    assert records[carl.member_id].status == AttendanceStatus.ABSENT

    due = next(iter(repos.financial.rows.values()))
    assert due.member_id == ana.member_id
    assert due.status == PaymentStatus.PAID
    assert due.title == "Monthly dues for October 2026"
    assert due.due_date == date(2026, 10, 1)

    rows = {r.member_id: r for r in svc.get_monthly_meeting(admin, 2026, 10)}
    assert rows[ana.member_id].present and rows[ana.member_id].due_checked
    assert rows[ana.member_id].due_amount == Decimal("50")
    assert rows[ben.member_id].excused and rows[ben.member_id].excuse_letter == "Out of town"
    assert rows[carl.member_id].absent and not rows[carl.member_id].due_checked


def test_monthly_meeting_resave_updates_in_place(container, repos, admin):
    ana = repos.members.add()
    repos.financial.add(member_id=ana.member_id, amount=Decimal("20"), due_date=date(2026, 10, 1))
    svc = container.attendance_service

    svc.save_monthly_meeting(admin, 2026, 10, [MonthlySheetRow(ana.member_id)])
    result = svc.save_monthly_meeting(
        admin, 2026, 10, [MonthlySheetRow(ana.member_id, present=True, due_checked=True, due_amount=Decimal("30"))]
    )

    assert result.dues_recorded == 1
    assert len(repos.attendance.rows) == 1
    assert next(iter(repos.attendance.rows.values())).status == AttendanceStatus.PRESENT
    assert len(repos.financial.rows) == 1
    due = next(iter(repos.financial.rows.values()))
    assert (due.status, due.amount) == (PaymentStatus.PAID, Decimal("30"))


def test_monthly_meeting_leaves_settled_dues_alone(container, repos, admin):
    ana = repos.members.add()
    ben = repos.members.add()
    waived = container.dues_service.create_dues(
        admin, member_id=ana.member_id, title="Monthly dues", amount="50", due_date="2026-10-15"
    )[0]
    container.dues_service.waive(admin, waived.record_id)
    svc = container.attendance_service
    svc.save_monthly_meeting(admin, 2026, 10, [MonthlySheetRow(ben.member_id, due_checked=True, due_amount=Decimal("20"))])

    result = svc.save_monthly_meeting(
        admin,
        2026,
        10,
        [
            MonthlySheetRow(ana.member_id, present=True, due_checked=True, due_amount=Decimal("50")),
            MonthlySheetRow(ben.member_id, present=True, due_checked=True, due_amount=Decimal("35")),
        ],
    )

    assert (result.attendance_saved, result.dues_recorded) == (2, 0)
    after = repos.financial.get_by_id(waived.record_id)
    assert (after.status, after.paid_date) == (PaymentStatus.WAIVED, None)
    paid = container.dues_service.monthly_payment(ben.member_id, 2026, 10)
    assert (paid.status, paid.amount) == (PaymentStatus.PAID, Decimal("20"))


def test_monthly_meeting_other_month_is_empty(container, repos, admin):
    ana = repos.members.add()
    container.attendance_service.save_monthly_meeting(admin, 2026, 10, [MonthlySheetRow(ana.member_id, present=True)])

    assert container.attendance_service.get_monthly_meeting(admin, 2026, 9) == []
    with pytest.raises(NotFoundError):
        container.attendance_service.save_monthly_meeting(admin, 2026, 10, [MonthlySheetRow(999)])
