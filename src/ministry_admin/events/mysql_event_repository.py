from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import EventStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import EventChanges, MinistryEvent, NewEvent
from .repository import EventRepository

_SELECT = """
    SELECT e.event_id, e.title, e.event_date, e.event_time, e.conductor, e.purpose,
           e.location, e.event_year, e.status, e.created_by, a.name AS created_by_name
    FROM ministry_events e
    LEFT JOIN admin_users a ON a.admin_id = e.created_by
"""


def _to_event(r: dict) -> MinistryEvent:
    return MinistryEvent(
        event_id=int(r["event_id"]),
        title=r["title"],
        event_date=as_date(r["event_date"]),
        event_time=normalize_mysql_time(r["event_time"]).strftime("%H:%M"),
        conductor=r["conductor"],
        purpose=r["purpose"],
        year=int(r["event_year"]),
        status=EventStatus(r["status"]),
        location=r.get("location"),
        created_by=int(r["created_by"]) if r.get("created_by") is not None else None,
        created_by_name=r.get("created_by_name"),
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, event_id: int) -> Optional[MinistryEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE e.event_id=%s", (int(event_id),))
            r = fetchone(cur)
            return _to_event(r) if r else None

    def list_events(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[EventStatus] = None,
        limit: Optional[int] = None,
    ) -> Sequence[MinistryEvent]:
        clauses = []
        params: list = []
        if start is not None:
            clauses.append("e.event_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("e.event_date <= %s")
            params.append(end)
        if status is not None:
            clauses.append("e.status=%s")
            params.append(status.value)

        sql = _SELECT
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY e.event_date ASC, e.event_time ASC"
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_event(r) for r in fetchall(cur)]

    def create(self, new: NewEvent) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO ministry_events(
                    title, event_date, event_time, conductor, purpose, location, event_year, status, created_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    new.title,
                    new.event_date,
                    new.event_time,
                    new.conductor,
                    new.purpose,
                    new.location,
                    new.event_date.year,
                    EventStatus.SCHEDULED.value,
                    new.created_by,
                ),
            )
            return int(cur.lastrowid)

    def update(self, event_id: int, changes: EventChanges) -> bool:
        columns = changes.as_columns()
        if not columns:
            return True

        assignments = ", ".join(f"{col}=%s" for col in columns)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE ministry_events SET {assignments} WHERE event_id=%s",
                (*columns.values(), int(event_id)),
            )
            return True
