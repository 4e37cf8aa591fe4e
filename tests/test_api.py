from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from werkzeug.security import generate_password_hash

from conftest import login_as, member_identity
from ministry_admin.core.enums import AttendanceStatus, PaymentStatus


@pytest.fixture
def as_admin(client, admin):
    login_as(client, admin)
    return client


def test_login_session_logout_roundtrip(client, repos):
    repos.admins.add(email="lead@parish.org", password_hash=generate_password_hash("pw123456"))

    bad = client.post("/api/auth/login", json={"email": "lead@parish.org", "password": "nope"})
    assert bad.status_code == 401
    assert bad.get_json() == {"error": "Invalid email or password"}

    ok = client.post("/api/auth/login", json={"email": "lead@parish.org", "password": "pw123456"})
    assert ok.status_code == 200
    assert ok.get_json()["user"]["role"] == "ADMIN"

    session = client.get("/api/auth/session").get_json()
    assert session["authenticated"] is True
    assert session["user"]["email"] == "lead@parish.org"

    client.post("/api/auth/logout")
    assert client.get("/api/auth/session").get_json() == {"authenticated": False, "user": None}


def test_login_requires_credentials(client):
    resp = client.post("/api/auth/login", json={})
    assert resp.status_code == 400


def test_registration_flow(client):
    status = client.get("/api/auth/register").get_json()
    assert status == {"hasAdmin": False, "registrationDisabled": False, "registrationOpen": True}

    created = client.post(
        "/api/auth/register", json={"name": "Fr. Jose", "email": "jose@parish.org", "password": "pw123456"}
    )
    assert created.status_code == 201
    body = created.get_json()
    assert body["admin"]["admin_code"] == "ADM-001"
    assert "password_hash" not in body["admin"]

    again = client.post("/api/auth/register", json={"name": "X", "email": "x@parish.org", "password": "pw123456"})
    assert again.status_code == 403


def test_disable_registration_requires_admin(client, repos, admin):
    assert client.post("/api/auth/disable-registration").status_code == 401

    repos.admins.add()
    login_as(client, admin)
    resp = client.post("/api/auth/disable-registration")

    assert resp.status_code == 200
    assert resp.get_json()["registrationDisabled"] is True


def test_admin_routes_reject_members(client, repos):
    m = repos.members.add()
    login_as(client, member_identity(m))

    resp = client.get("/api/members")

    assert resp.status_code == 403
    assert resp.get_json() == {"error": "Admin access required"}


def test_member_routes_reject_admins(as_admin):
    assert as_admin.get("/api/member/profile").status_code == 403


def test_unauthenticated_calls_get_401(client):
    for path in ("/api/members", "/api/events", "/api/notifications", "/api/member/schedule"):
        assert client.get(path).status_code == 401


def test_member_crud(as_admin):
    created = as_admin.post(
        "/api/members",
        json={
            "surname": "Santos",
            "givenName": "Maria",
            "birthday": "2008-05-02",
            "address": "12 Chapel St",
            "parentContact": "0917",
            "dateOfInvestiture": "2020-06-01",
            "username": "msantos",
            "password": "secret1",
        },
    )
    assert created.status_code == 201
    member = created.get_json()["member"]
    assert member["email"] == "msantos@ministry.local"
    assert member["serviceLevel"] == "SENIOR"

    member_id = member["id"]
    assert as_admin.get(f"/api/members/{member_id}").get_json()["fullName"] == "Maria Santos"

    updated = as_admin.put(f"/api/members/{member_id}", json={"contactNumber": "0999"})
    assert updated.get_json()["contactNumber"] == "0999"

    removed = as_admin.delete(f"/api/members/{member_id}")
    assert removed.get_json()["member"]["memberStatus"] == "INACTIVE"

    assert as_admin.get("/api/members?status=ACTIVE").get_json() == []
    assert as_admin.get("/api/members/999").status_code == 404


def test_create_member_conflict_is_409(as_admin, repos):
    repos.members.add(email="msantos@ministry.local")
    resp = as_admin.post(
        "/api/members",
        json={
            "surname": "Santos",
            "givenName": "Maria",
            "birthday": "2008-05-02",
            "address": "12 Chapel St",
            "parentContact": "0917",
            "dateOfInvestiture": "2020-06-01",
            "username": "msantos",
            "password": "secret1",
        },
    )
    assert resp.status_code == 409


def test_member_profile(client, repos):
    m = repos.members.add(given_name="Ana", surname="Cruz")
    login_as(client, member_identity(m))

    body = client.get("/api/member/profile").get_json()

    assert body["fullName"] == "Ana Cruz"
    assert body["yearsOfService"] == 4


def test_mark_and_summarize_attendance(as_admin, repos):
    a = repos.members.add()
    b = repos.members.add()

    single = as_admin.post(
        "/api/attendance",
        json={"memberId": a.member_id, "eventType": "SUNDAY_MASS", "eventDate": "2026-10-18", "serviceTime": "AM", "status": "PRESENT"},
    )
    assert single.status_code == 200
    assert single.get_json()["status"] == "PRESENT"

    bulk = as_admin.post(
        "/api/attendance",
        json={
            "eventType": "SUNDAY_MASS",
            "eventDate": "2026-10-18",
            "serviceTime": "AM",
            "records": [{"memberId": b.member_id, "status": "LATE"}],
        },
    )
    assert len(bulk.get_json()["records"]) == 1

    summary = as_admin.get("/api/attendance/summary?eventType=SUNDAY_MASS&eventDate=2026-10-18&serviceTime=AM")
    assert summary.get_json()["summary"]["rate"] == 100

    bad = as_admin.post("/api/attendance", json={"memberId": a.member_id, "eventType": "PICNIC", "eventDate": "2026-10-18", "status": "PRESENT"})
    assert bad.status_code == 400


def test_mark_attendance_rejects_malformed_records(as_admin, repos):
    occasion = {"eventType": "SUNDAY_MASS", "eventDate": "2026-10-18", "serviceTime": "AM"}

    for records in ([{"memberId": "abc", "status": "PRESENT"}], ["PRESENT"], 7):
        resp = as_admin.post("/api/attendance", json={**occasion, "records": records})
        assert resp.status_code == 400

    single = as_admin.post("/api/attendance", json={**occasion, "memberId": "abc", "status": "PRESENT"})
    assert single.status_code == 400
    assert repos.attendance.rows == {}


def test_monthly_meeting_endpoints(as_admin, repos):
    a = repos.members.add()
    b = repos.members.add()

    assert as_admin.get("/api/attendance/monthly?year=2026").status_code == 400

    saved = as_admin.post(
        "/api/attendance/monthly",
        json={
            "year": 2026,
            "month": 10,
            "attendance": {
                str(a.member_id): {"memberId": a.member_id, "present": True, "dueChecked": True, "dueAmount": 50},
                str(b.member_id): {"memberId": b.member_id, "excused": True, "excuseLetter": "Sick"},
            },
        },
    )
    assert saved.status_code == 200
    assert saved.get_json()["attendance_saved"] == 2
    assert saved.get_json()["dues_recorded"] == 1

    rows = {r["member_id"]: r for r in as_admin.get("/api/attendance/monthly?year=2026&month=10").get_json()}
    assert rows[a.member_id]["due_checked"] is True
    assert rows[a.member_id]["due_amount"] == 50.0
    assert rows[b.member_id]["excused"] is True
    assert rows[b.member_id]["absent"] is False

    invalid = as_admin.post(
        "/api/attendance/monthly", json={"year": 2026, "month": 10, "attendance": [{"memberId": "abc"}]}
    )
    assert invalid.status_code == 400
    assert invalid.get_json() == {"error": "Invalid attendance data"}


def test_dues_endpoints(as_admin, repos):
    m = repos.members.add(given_name="Ana", surname="Cruz")

    created = as_admin.post(
        "/api/dues", json={"memberId": m.member_id, "title": "Retreat fee", "amount": 150, "dueDate": "2026-11-15"}
    )
    assert created.status_code == 201
    record_id = created.get_json()["dues"][0]["record_id"]

    listing = as_admin.get("/api/dues?search=cruz").get_json()
    assert listing["totals"]["pending"] == 150.0
    assert listing["dues"][0]["member_name"] == "Ana Cruz"

    missing = as_admin.post(f"/api/dues/{record_id}/pay", json={"paidDate": "2026-10-19"})
    assert missing.status_code == 400

    paid = as_admin.post(f"/api/dues/{record_id}/pay", json={"paidDate": "2026-10-19", "paymentMethod": "CASH"})
    assert paid.get_json()["status"] == "PAID"
    assert as_admin.post(f"/api/dues/{record_id}/waive").status_code == 400
    assert as_admin.post("/api/dues/999/overdue").status_code == 404

    yearly = as_admin.get("/api/financial/dues?year=2026").get_json()
    assert yearly["year"] == 2026
    assert yearly["results"][0]["total"] == 150.0


def test_member_expenses_endpoints(client, repos):
    m = repos.members.add()
    repos.financial.add(member_id=m.member_id, amount=Decimal("25"), status=PaymentStatus.PAID)
    login_as(client, member_identity(m))

    created = client.post("/api/member/expenses", json={"description": "Candles", "amount": "120"})
    assert created.status_code == 201
    assert created.get_json()["status"] == "pending"

    history = client.get("/api/member/expenses").get_json()
    assert {h["status"] for h in history} == {"pending", "approved"}


def test_event_endpoints(as_admin, repos):
    created = as_admin.post(
        "/api/events",
        json={"title": "Recollection", "date": "2026-10-25", "time": "14:00", "conductor": "Fr. Jose", "purpose": "Advent"},
    )
    assert created.status_code == 201
    event_id = created.get_json()["event_id"]

    incomplete = as_admin.post("/api/events", json={"title": "Recollection"})
    assert incomplete.status_code == 400
    assert incomplete.get_json() == {"error": "All fields are required"}

    patched = as_admin.patch(f"/api/events/{event_id}", json={"location": "Chapel"})
    assert patched.get_json()["location"] == "Chapel"

    cancelled = as_admin.delete(f"/api/events/{event_id}")
    assert cancelled.get_json()["success"] is True
    assert cancelled.get_json()["event"]["status"] == "CANCELLED"

    assert [e["title"] for e in as_admin.get("/api/events").get_json()] == ["Recollection"]


def test_notification_endpoints(client, repos, admin):
    m = repos.members.add()
    login_as(client, admin)
    created = client.post("/api/notifications", json={"title": "Reminder", "message": "Bring candles", "priority": "high"})
    assert created.status_code == 201
    assert created.get_json()["priority"] == "HIGH"
    assert client.post("/api/notifications", json={"title": "", "message": "x"}).status_code == 400

    login_as(client, member_identity(m))
    assert client.get("/api/notifications/unread-count").get_json() == {"count": 1}

    notification_id = client.get("/api/notifications").get_json()[0]["notification_id"]
    read = client.patch(f"/api/notifications/{notification_id}", json={"isRead": True})
    assert read.get_json()["is_read"] is True
    assert client.get("/api/notifications/unread-count").get_json() == {"count": 0}
    assert client.post("/api/notifications/mark-all-read").get_json()["updated"] == 0
    assert client.post("/api/notifications").status_code == 403


def test_member_schedule_endpoints(client, repos, admin, container):
    from ministry_admin.attendance.model import Occasion
    from ministry_admin.core.enums import EventType, ServiceTime

    m = repos.members.add()
    container.attendance_service.mark_attendance(
        admin,
        member_id=m.member_id,
        occasion=Occasion(EventType.SUNDAY_MASS, date(2026, 10, 18), ServiceTime.PM),
        status=AttendanceStatus.PRESENT.value,
    )
    login_as(client, member_identity(m))

    duties = client.get("/api/member/duties?year=2026&month=10").get_json()
    assert duties["duties"] == [{"day": 18, "duties": ["Sunday Mass PM"]}]

    cal = client.get("/api/member/calendar?year=2026&month=10").get_json()
    assert len(cal["days"]) == 42
    assert cal["days"][0] == {"day": 27, "is_current_month": False, "has_duty": False, "duties": []}

    schedule = client.get("/api/member/schedule").get_json()
    assert schedule[0]["title"] == "Sunday Mass - PRESENT"
    assert schedule[0]["status"] == "completed"

    assert client.get("/api/member/calendar?year=2026&month=13").status_code == 400


def test_group_endpoints(client, repos, admin):
    m = repos.members.add()
    login_as(client, admin)

    created = client.post("/api/groups", json={"name": "St. Luke", "leaderId": m.member_id})
    assert created.status_code == 201
    group_id = created.get_json()["group_id"]
    assert client.post("/api/groups", json={"name": "ST. LUKE"}).status_code == 409

    other = repos.members.add()
    added = client.post(f"/api/groups/{group_id}/members", json={"memberId": other.member_id})
    assert added.get_json()["member_ids"] == [m.member_id, other.member_id]
    removed = client.delete(f"/api/groups/{group_id}/members/{other.member_id}")
    assert removed.get_json()["member_ids"] == [m.member_id]

    login_as(client, member_identity(m))
    assert client.get("/api/member/group").get_json() == {"groupName": "St. Luke"}
    mine = client.get("/api/member/groups").get_json()
    assert mine["my_group"]["is_my_group"] is True
    assert mine["other_groups"] == []

    login_as(client, admin)
    assert client.delete(f"/api/groups/{group_id}").get_json() == {"success": True, "id": group_id}
    assert client.get("/api/groups").get_json() == []


def test_birthday_endpoints(as_admin, repos):
    repos.members.add(given_name="Ana", surname="Cruz", birthdate=date(2010, 10, 19))
    repos.members.add(given_name="Ben", surname="Reyes", birthdate=date(2010, 3, 1))

    assert [p["name"] for p in as_admin.get("/api/birthdays?month=10").get_json()] == ["Ana Cruz"]

    announced = as_admin.post("/api/birthdays/announce").get_json()
    assert announced["announced"] == 1
    assert announced["notifications"][0]["message"] == "Birthday of Ana Cruz"


def test_dashboards(client, repos, admin):
    m = repos.members.add()
    login_as(client, admin)
    board = client.get("/api/admin/dashboard").get_json()
    assert board["total_members"] == 1
    assert board["members_by_level"]["JUNIOR"] == 1
    assert board["dues_totals"]["total"] == 0.0

    login_as(client, member_identity(m))
    mine = client.get("/api/member/dashboard").get_json()
    assert mine["serviceLevel"] == "JUNIOR"
    assert mine["groupName"] == "Not Assigned"
    assert mine["unreadNotifications"] == 0


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Not found"}
