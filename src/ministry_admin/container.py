from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .birthdays.service import BirthdayService
from .common.datetime_utils import now_local, today_local
from .core.constants import MEMBER_EMAIL_DOMAIN
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .dues.mysql_financial_repository import MySQLFinancialRepository
from .dues.repository import FinancialRepository
from .dues.service import DuesService
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .events.service import EventService
from .groups.mysql_group_repository import MySQLGroupRepository
from .groups.repository import GroupRepository
from .groups.service import GroupService
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .members.service import MemberService
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.repository import NotificationRepository
from .notifications.service import NotificationService
from .schedules.service import ScheduleService
from .users.mysql_admin_repository import MySQLAdminUserRepository, MySQLSettingsRepository
from .users.repository import AdminUserRepository, SettingsRepository
from .users.service import AuthService, RegistrationService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    members_repo: MemberRepository
    admins_repo: AdminUserRepository
    settings_repo: SettingsRepository
    attendance_repo: AttendanceRepository
    financial_repo: FinancialRepository
    events_repo: EventRepository
    notifications_repo: NotificationRepository
    groups_repo: GroupRepository

    member_service: MemberService
    auth_service: AuthService
    registration_service: RegistrationService
    notification_service: NotificationService
    dues_service: DuesService
    attendance_service: AttendanceService
    event_service: EventService
    schedule_service: ScheduleService
    group_service: GroupService
    birthday_service: BirthdayService
    dashboard_service: DashboardService


def assemble_container(
    *,
    members_repo: MemberRepository,
    admins_repo: AdminUserRepository,
    settings_repo: SettingsRepository,
    attendance_repo: AttendanceRepository,
    financial_repo: FinancialRepository,
    events_repo: EventRepository,
    notifications_repo: NotificationRepository,
    groups_repo: GroupRepository,
    conn: Optional[DatabaseConnection] = None,
    member_email_domain: str = MEMBER_EMAIL_DOMAIN,
    today: Callable[[], date] = today_local,
    now: Callable[[], datetime] = now_local,
) -> Container:
    """Wire services on top of the given repositories."""

    notification_service = NotificationService(notifications_repo, clock=now)
    member_service = MemberService(members_repo, email_domain=member_email_domain, clock=today)
    dues_service = DuesService(financial_repo, members_repo, notification_service, clock=today)
    event_service = EventService(events_repo, notification_service, clock=today)
    group_service = GroupService(groups_repo, members_repo, clock=today)
    birthday_service = BirthdayService(members_repo, admins_repo, notification_service, clock=today)

    return Container(
        conn=conn,
        members_repo=members_repo,
        admins_repo=admins_repo,
        settings_repo=settings_repo,
        attendance_repo=attendance_repo,
        financial_repo=financial_repo,
        events_repo=events_repo,
        notifications_repo=notifications_repo,
        groups_repo=groups_repo,
        member_service=member_service,
        auth_service=AuthService(admins_repo, members_repo),
        registration_service=RegistrationService(admins_repo, members_repo, settings_repo),
        notification_service=notification_service,
        dues_service=dues_service,
        attendance_service=AttendanceService(attendance_repo, members_repo, dues_service),
        event_service=event_service,
        schedule_service=ScheduleService(attendance_repo, events_repo, clock=today),
        group_service=group_service,
        birthday_service=birthday_service,
        dashboard_service=DashboardService(
            members_repo,
            event_service,
            dues_service,
            notification_service,
            group_service,
            birthday_service,
            clock=today,
        ),
    )


def build_container(
    *, db_config: dict, pool_size: int = 5, member_email_domain: str = MEMBER_EMAIL_DOMAIN
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config, pool_size=pool_size))

    return assemble_container(
        conn=conn,
        members_repo=MySQLMemberRepository(conn),
        admins_repo=MySQLAdminUserRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        financial_repo=MySQLFinancialRepository(conn),
        events_repo=MySQLEventRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        groups_repo=MySQLGroupRepository(conn),
        member_email_domain=member_email_domain,
    )
