from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from loguru import logger

from ..common.datetime_utils import today_local, whole_years_between
from ..core.enums import MemberStatus
from ..core.identity import Identity, require_admin, require_authenticated
from ..members.repository import MemberRepository
from ..notifications.model import Notification
from ..notifications.service import NotificationService
from ..users.repository import AdminUserRepository
from .model import BirthdayPerson


class BirthdayService:
    """Use cases: the birthday roster (members and admins) and birthday announcements."""

    def __init__(
        self,
        members: MemberRepository,
        admins: AdminUserRepository,
        notifications: NotificationService,
        *,
        clock: Callable[[], date] = today_local,
    ):
        self._members = members
        self._admins = admins
        self._notifications = notifications
        self._clock = clock

    def _everyone(self) -> list[BirthdayPerson]:
        today = self._clock()
        people = [
            BirthdayPerson(
                id=f"member-{m.member_id}",
                name=m.full_name,
                birthday=m.birthdate,
                age=whole_years_between(m.birthdate, today),
                user_type="Member",
                service_level=m.service_level(today),
            )
            for m in self._members.list_members(status=MemberStatus.ACTIVE)
            if m.birthdate is not None
        ]
        people += [
            BirthdayPerson(
                id=f"admin-{a.admin_id}",
                name=a.name,
                birthday=a.birthdate,
                age=whole_years_between(a.birthdate, today),
                user_type="Admin",
                position=a.position,
            )
            for a in self._admins.list_active()
            if a.birthdate is not None
        ]
        people.sort(key=lambda p: (p.birthday.month, p.birthday.day, p.name))
        return people

    def list_birthdays(self, caller: Identity, *, month: Optional[int] = None) -> list[BirthdayPerson]:
        require_authenticated(caller)
        people = self._everyone()
        if month:
            people = [p for p in people if p.birthday.month == int(month)]
        return people

    def todays_birthdays(self) -> list[BirthdayPerson]:
        today = self._clock()
        return [p for p in self._everyone() if p.falls_on(today)]

    def announce_today(self, caller: Identity) -> list[Notification]:
        admin = require_admin(caller)
        posted = [self._notifications.notify_birthday(p.name) for p in self.todays_birthdays()]
        logger.info(f"Admin {admin.user_id} announced {len(posted)} birthday(s)")
        return posted
