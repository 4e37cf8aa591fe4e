from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable

from ..common.datetime_utils import today_local
from ..core.enums import MemberStatus, ServiceLevel
from ..core.exceptions import NotFoundError
from ..core.identity import Identity, require_admin, require_member
from ..birthdays.model import BirthdayPerson
from ..birthdays.service import BirthdayService
from ..dues.service import DuesService
from ..dues.totals import DuesTotals
from ..events.model import MinistryEvent
from ..events.service import EventService
from ..groups.service import GroupService
from ..members.model import MemberView
from ..members.repository import MemberRepository
from ..notifications.service import NotificationService


@dataclass(frozen=True)
class AdminDashboard:
    total_members: int
    active_members: int
    inactive_members: int
    members_by_level: dict[str, int]
    upcoming_events: list[MinistryEvent]
    dues_totals: DuesTotals
    unread_notifications: int
    todays_birthdays: list[BirthdayPerson]


@dataclass(frozen=True)
class MemberDashboard:
    profile: MemberView
    group_name: str
    unread_notifications: int
    upcoming_events: list[MinistryEvent]


class DashboardService:
    """Read-only summaries assembled from the other services."""

    def __init__(
        self,
        members: MemberRepository,
        events: EventService,
        dues: DuesService,
        notifications: NotificationService,
        groups: GroupService,
        birthdays: BirthdayService,
        *,
        clock: Callable[[], date] = today_local,
    ):
        self._members = members
        self._events = events
        self._dues = dues
        self._notifications = notifications
        self._groups = groups
        self._birthdays = birthdays
        self._clock = clock

    def admin_dashboard(self, caller: Identity) -> AdminDashboard:
        require_admin(caller)
        today = self._clock()
        members = list(self._members.list_members())
        active = [m for m in members if m.status == MemberStatus.ACTIVE]

        by_level = {level.value: 0 for level in ServiceLevel}
        for m in active:
            by_level[m.service_level(today).value] += 1

        return AdminDashboard(
            total_members=len(members),
            active_members=len(active),
            inactive_members=len(members) - len(active),
            members_by_level=by_level,
            upcoming_events=self._events.upcoming(),
            dues_totals=self._dues.list_dues(caller).totals,
            unread_notifications=self._notifications.unread_count(caller),
            todays_birthdays=self._birthdays.todays_birthdays(),
        )

    def member_dashboard(self, caller: Identity) -> MemberDashboard:
        me = require_member(caller)
        member = self._members.get_by_id(me.user_id)
        if member is None:
            raise NotFoundError("Member not found")

        return MemberDashboard(
            profile=MemberView.of(member, self._clock()),
            group_name=self._groups.group_name_for(me.user_id),
            unread_notifications=self._notifications.unread_count(caller),
            upcoming_events=self._events.upcoming(),
        )
