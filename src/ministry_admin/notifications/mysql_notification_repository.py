from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import NotificationType, Priority, TargetType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Audience, NewNotification, Notification
from .repository import NotificationRepository

_COLUMNS = """
    notification_id, title, message, notification_type, target_type, target_id,
    priority, is_read, read_at, scheduled_for, sent_at, created_at
"""


def _to_notification(r: dict) -> Notification:
    return Notification(
        notification_id=int(r["notification_id"]),
        title=r["title"],
        message=r["message"],
        notification_type=NotificationType(r["notification_type"]),
        target_type=TargetType(r["target_type"]),
        priority=Priority(r["priority"]),
        created_at=r["created_at"],
        is_read=bool(r.get("is_read")),
        target_id=int(r["target_id"]) if r.get("target_id") is not None else None,
        read_at=r.get("read_at"),
        scheduled_for=r.get("scheduled_for"),
        sent_at=r.get("sent_at"),
    )


def _audience_where(audience: Audience) -> tuple[str, tuple]:
    clauses = ["target_type=%s"]
    params: list = [TargetType.ALL_MEMBERS.value]
    if audience.admins:
        clauses.append("target_type=%s")
        params.append(TargetType.ADMINS_ONLY.value)
    if audience.member_id is not None:
        clauses.append("(target_type=%s AND target_id=%s)")
        params += [TargetType.SPECIFIC_MEMBER.value, int(audience.member_id)]
    return "(" + " OR ".join(clauses) + ")", tuple(params)


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM notifications WHERE notification_id=%s", (int(notification_id),))
            r = fetchone(cur)
            return _to_notification(r) if r else None

    def list_visible(self, audience: Audience, *, limit: int) -> Sequence[Notification]:
        where, params = _audience_where(audience)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM notifications
                WHERE {where}
                ORDER BY created_at DESC, notification_id DESC
                LIMIT %s
                """,
                (*params, int(limit)),
            )
            return [_to_notification(r) for r in fetchall(cur)]

    def count_unread(self, audience: Audience) -> int:
        where, params = _audience_where(audience)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS cnt FROM notifications WHERE is_read=0 AND {where}", params)
            r = fetchone(cur)
            return int(r["cnt"]) if r else 0

    def create(self, new: NewNotification) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(
                    title, message, notification_type, target_type, target_id,
                    priority, scheduled_for, sent_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    new.title,
                    new.message,
                    new.notification_type.value,
                    new.target_type.value,
                    new.target_id,
                    new.priority.value,
                    new.scheduled_for,
                    new.sent_at,
                ),
            )
            return int(cur.lastrowid)

    def set_read(self, notification_id: int, *, is_read: bool, at: Optional[datetime]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE notifications SET is_read=%s, read_at=%s WHERE notification_id=%s",
                (1 if is_read else 0, at if is_read else None, int(notification_id)),
            )
            return True

    def mark_all_read(self, audience: Audience, *, at: datetime) -> int:
        where, params = _audience_where(audience)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE notifications SET is_read=1, read_at=%s WHERE is_read=0 AND {where}",
                (at, *params),
            )
            return int(cur.rowcount)
