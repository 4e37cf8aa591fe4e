from __future__ import annotations

import os
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

os.environ.setdefault("APP_ENV", "testing")

from ministry_admin.attendance.model import AttendanceRecord
from ministry_admin.container import assemble_container
from ministry_admin.core.enums import FinancialType, MemberStatus, PaymentStatus
from ministry_admin.core.identity import AdminIdentity, MemberIdentity
from ministry_admin.dues.model import FinancialRecord
from ministry_admin.events.model import MinistryEvent
from ministry_admin.groups.model import MinistryGroup
from ministry_admin.members.model import Member
from ministry_admin.notifications.model import Notification
from ministry_admin.users.model import AdminUser

TODAY = date(2026, 10, 19)
NOW = datetime(2026, 10, 19, 9, 30, 0)


class FakeMemberRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, Member] = {}

    def add(self, **kwargs) -> Member:
        member_id = self._next_id
        self._next_id += 1
        defaults = dict(
            member_id=member_id,
            surname="Cruz",
            given_name=f"Member{member_id}",
            email=f"member{member_id}@ministry.local",
            password_hash="x",
            birthdate=date(2005, 3, 14),
            address="Parish Road",
            parent_contact="0917",
            contact_number=None,
            date_joined=date(2022, 6, 1),
        )
        defaults.update(kwargs)
        member = Member(**defaults)
        self.rows[member.member_id] = member
        return member

    def get_by_id(self, member_id):
        return self.rows.get(int(member_id))

    def get_by_email(self, email):
        return next((m for m in self.rows.values() if m.email == email), None)

    def list_members(self, *, status=None):
        found = [m for m in self.rows.values() if status is None or m.status == status]
        return sorted(found, key=lambda m: (m.surname, m.given_name))

    def create(self, new):
        return self.add(
            surname=new.surname,
            given_name=new.given_name,
            email=new.email,
            password_hash=new.password_hash,
            birthdate=new.birthdate,
            address=new.address,
            parent_contact=new.parent_contact,
            contact_number=new.contact_number,
            date_joined=new.date_joined,
            created_by=new.created_by,
        ).member_id

    def update(self, member_id, changes):
        current = self.rows[int(member_id)]
        columns = changes.as_columns()
        if "status" in columns:
            columns["status"] = MemberStatus(columns["status"])
        self.rows[current.member_id] = replace(current, **columns)
        return True

    def set_status(self, member_id, status):
        current = self.rows.get(int(member_id))
        if not current:
            return False
        self.rows[current.member_id] = replace(current, status=status)
        return True


class FakeAdminRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, AdminUser] = {}

    def add(self, **kwargs) -> AdminUser:
        admin_id = self._next_id
        self._next_id += 1
        defaults = dict(
            admin_id=admin_id,
            admin_code=f"ADM-{admin_id:03d}",
            name=f"Admin {admin_id}",
            email=f"admin{admin_id}@parish.org",
            password_hash="x",
        )
        defaults.update(kwargs)
        admin = AdminUser(**defaults)
        self.rows[admin.admin_id] = admin
        return admin

    def get_by_id(self, admin_id):
        return self.rows.get(int(admin_id))

    def get_by_email(self, email):
        return next((a for a in self.rows.values() if a.email == email), None)

    def count_admins(self):
        return len(self.rows)

    def list_active(self):
        return [a for a in self.rows.values() if a.is_active]

    def create(self, new):
        return self.add(
            admin_code=new.admin_code,
            name=new.name,
            email=new.email,
            password_hash=new.password_hash,
            position=new.position,
            contact_number=new.contact_number,
            birthdate=new.birthdate,
            permissions=tuple(new.permissions),
        ).admin_id


class FakeSettingsRepo:
    def __init__(self):
        self.values: dict[str, str] = {}

    def get_setting(self, key):
        return self.values.get(key)

    def set_setting(self, key, value):
        self.values[key] = value


class FakeAttendanceRepo:
    def __init__(self, members: FakeMemberRepo):
        self._members = members
        self._next_id = 1
        self.rows: dict[int, AttendanceRecord] = {}

    def _named(self, r):
        m = self._members.get_by_id(r.member_id)
        return replace(r, member_name=m.full_name if m else None)

    def find_for_occasion(self, member_id, occasion):
        for r in self.rows.values():
            if r.member_id == int(member_id) and r.occasion == occasion:
                return self._named(r)
        return None

    def find_in_range(self, member_id, event_type, start, end):
        found = [
            r for r in self.rows.values()
            if r.member_id == int(member_id) and r.event_type == event_type and start <= r.event_date <= end
        ]
        return self._named(min(found, key=lambda r: r.event_date)) if found else None

    def list_for_occasion(self, occasion):
        return [self._named(r) for r in self.rows.values() if r.occasion == occasion]

    def list_by_type_between(self, event_type, start, end):
        found = [r for r in self.rows.values() if r.event_type == event_type and start <= r.event_date <= end]
        return [self._named(r) for r in sorted(found, key=lambda r: r.event_date)]

    def list_for_member(self, member_id, *, start=None, end=None):
        found = [
            r for r in self.rows.values()
            if r.member_id == int(member_id)
            and (start is None or r.event_date >= start)
            and (end is None or r.event_date <= end)
        ]
        return [self._named(r) for r in sorted(found, key=lambda r: r.event_date)]

    def create(self, *, member_id, occasion, status, notes, recorded_by):
        rid = self._next_id
        self._next_id += 1
        self.rows[rid] = AttendanceRecord(
            attendance_id=rid,
            member_id=int(member_id),
            event_type=occasion.event_type,
            event_date=occasion.event_date,
            status=status,
            service_time=occasion.service_time,
            notes=notes,
            recorded_by=recorded_by,
        )
        return rid

    def update(self, attendance_id, *, status, notes, recorded_by):
        current = self.rows[int(attendance_id)]
        self.rows[current.attendance_id] = replace(current, status=status, notes=notes, recorded_by=recorded_by)
        return True


class FakeFinancialRepo:
    def __init__(self, members: FakeMemberRepo):
        self._members = members
        self._next_id = 1
        self.rows: dict[int, FinancialRecord] = {}

    def _named(self, r):
        m = self._members.get_by_id(r.member_id)
        return replace(r, member_name=m.full_name if m else None)

    def add(self, **kwargs) -> FinancialRecord:
        rid = self._next_id
        self._next_id += 1
        defaults = dict(
            record_id=rid,
            member_id=1,
            record_type=FinancialType.DUES,
            title="Monthly dues",
            amount=Decimal("0"),
            status=PaymentStatus.PENDING,
            transaction_date=TODAY,
        )
        defaults.update(kwargs)
        record = FinancialRecord(**defaults)
        self.rows[rid] = record
        return record

    def get_by_id(self, record_id):
        r = self.rows.get(int(record_id))
        return self._named(r) if r else None

    def list_records(self, *, record_types=(FinancialType.DUES,), member_id=None, start=None, end=None, limit=None):
        types = set(record_types)
        found = [
            r for r in self.rows.values()
            if r.record_type in types
            and (member_id is None or r.member_id == int(member_id))
            and (start is None or r.transaction_date >= start)
            and (end is None or r.transaction_date <= end)
        ]
        found.sort(key=lambda r: (r.transaction_date, r.record_id), reverse=True)
        if limit is not None:
            found = found[:limit]
        return [self._named(r) for r in found]

    def find_dues_due_between(self, member_id, start, end):
        for r in sorted(self.rows.values(), key=lambda r: r.record_id):
            if (
                r.member_id == int(member_id)
                and r.record_type == FinancialType.DUES
                and r.due_date is not None
                and start <= r.due_date <= end
            ):
                return self._named(r)
        return None

    def create(self, new):
        return self.add(
            member_id=new.member_id,
            record_type=new.record_type,
            title=new.title,
            amount=new.amount,
            status=new.status,
            transaction_date=new.transaction_date,
            description=new.description,
            category=new.category,
            due_date=new.due_date,
            paid_date=new.paid_date,
            payment_method=new.payment_method,
            recorded_by=new.recorded_by,
        ).record_id

    def set_status(self, record_id, status, *, payment=None, amount=None):
        current = self.rows.get(int(record_id))
        if not current:
            return False
        changes = {"status": status}
        if payment is not None:
            changes.update(
                paid_date=payment.paid_date,
                payment_method=payment.payment_method,
                reference=payment.reference,
                notes=payment.notes,
            )
        if amount is not None:
            changes["amount"] = amount
        self.rows[current.record_id] = replace(current, **changes)
        return True


class FakeEventRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, MinistryEvent] = {}

    def get_by_id(self, event_id):
        return self.rows.get(int(event_id))

    def list_events(self, *, start=None, end=None, status=None, limit=None):
        found = [
            e for e in self.rows.values()
            if (start is None or e.event_date >= start)
            and (end is None or e.event_date <= end)
            and (status is None or e.status == status)
        ]
        found.sort(key=lambda e: (e.event_date, e.event_time))
        return found[:limit] if limit is not None else found

    def create(self, new):
        eid = self._next_id
        self._next_id += 1
        self.rows[eid] = MinistryEvent(
            event_id=eid,
            title=new.title,
            event_date=new.event_date,
            event_time=new.event_time,
            conductor=new.conductor,
            purpose=new.purpose,
            year=new.event_date.year,
            location=new.location,
            created_by=new.created_by,
        )
        return eid

    def update(self, event_id, changes):
        current = self.rows[int(event_id)]
        columns = changes.as_columns()
        updates = {k: v for k, v in columns.items() if k not in ("event_year", "status")}
        if "event_year" in columns:
            updates["year"] = columns["event_year"]
        if changes.status is not None:
            updates["status"] = changes.status
        self.rows[current.event_id] = replace(current, **updates)
        return True


class FakeNotificationRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, Notification] = {}

    def get_by_id(self, notification_id):
        return self.rows.get(int(notification_id))

    def list_visible(self, audience, *, limit):
        found = [n for n in self.rows.values() if audience.can_see(n)]
        found.sort(key=lambda n: (n.created_at, n.notification_id), reverse=True)
        return found[:limit]

    def count_unread(self, audience):
        return sum(1 for n in self.rows.values() if audience.can_see(n) and not n.is_read)

    def create(self, new):
        nid = self._next_id
        self._next_id += 1
        self.rows[nid] = Notification(
            notification_id=nid,
            title=new.title,
            message=new.message,
            notification_type=new.notification_type,
            target_type=new.target_type,
            priority=new.priority,
            created_at=datetime(2026, 10, 19, 9, 0, nid % 60),
            target_id=new.target_id,
            scheduled_for=new.scheduled_for,
            sent_at=new.sent_at,
        )
        return nid

    def set_read(self, notification_id, *, is_read, at):
        current = self.rows[int(notification_id)]
        self.rows[current.notification_id] = replace(current, is_read=is_read, read_at=at if is_read else None)
        return True

    def mark_all_read(self, audience, *, at):
        changed = 0
        for n in list(self.rows.values()):
            if audience.can_see(n) and not n.is_read:
                self.rows[n.notification_id] = replace(n, is_read=True, read_at=at)
                changed += 1
        return changed


class FakeGroupRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, MinistryGroup] = {}

    def get_by_id(self, group_id):
        return self.rows.get(int(group_id))

    def list_groups(self):
        return sorted(self.rows.values(), key=lambda g: g.name)

    def create(self, new):
        gid = self._next_id
        self._next_id += 1
        self.rows[gid] = MinistryGroup(
            group_id=gid,
            name=new.name,
            description=new.description,
            leader_member_id=new.leader_member_id,
            meeting_time=new.meeting_time,
            location=new.location,
        )
        return gid

    def delete(self, group_id):
        return self.rows.pop(int(group_id), None) is not None

    def add_member(self, group_id, member_id):
        g = self.rows[int(group_id)]
        if g.has_member(int(member_id)):
            return False
        self.rows[g.group_id] = replace(g, member_ids=g.member_ids + (int(member_id),))
        return True

    def remove_member(self, group_id, member_id):
        g = self.rows[int(group_id)]
        if not g.has_member(int(member_id)):
            return False
        self.rows[g.group_id] = replace(g, member_ids=tuple(m for m in g.member_ids if m != int(member_id)))
        return True


@pytest.fixture
def repos():
    members = FakeMemberRepo()
    return SimpleNamespace(
        members=members,
        admins=FakeAdminRepo(),
        settings=FakeSettingsRepo(),
        attendance=FakeAttendanceRepo(members),
        financial=FakeFinancialRepo(members),
        events=FakeEventRepo(),
        notifications=FakeNotificationRepo(),
        groups=FakeGroupRepo(),
    )


@pytest.fixture
def container(repos):
    return assemble_container(
        members_repo=repos.members,
        admins_repo=repos.admins,
        settings_repo=repos.settings,
        attendance_repo=repos.attendance,
        financial_repo=repos.financial,
        events_repo=repos.events,
        notifications_repo=repos.notifications,
        groups_repo=repos.groups,
        today=lambda: TODAY,
        now=lambda: NOW,
    )


@pytest.fixture
def admin() -> AdminIdentity:
    return AdminIdentity(user_id=1, name="Admin 1", email="admin1@parish.org")


@pytest.fixture
def app(container):
    from ministry_admin.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


def login_as(client, identity) -> None:
    from ministry_admin.core.identity import identity_to_claims

    with client.session_transaction() as sess:
        sess.update(identity_to_claims(identity))


def member_identity(member: Member) -> MemberIdentity:
    return MemberIdentity(user_id=member.member_id, name=member.full_name, email=member.email)
