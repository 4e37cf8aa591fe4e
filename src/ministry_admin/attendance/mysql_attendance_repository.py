from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, EventType, ServiceTime
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone
from .model import AttendanceRecord, Occasion
from .repository import AttendanceRepository

_SELECT = """
    SELECT a.attendance_id, a.member_id, a.event_type, a.event_date, a.service_time,
           a.status, a.notes, a.recorded_by,
           CONCAT(m.given_name, ' ', m.surname) AS member_name
    FROM attendance_records a
    JOIN members m ON m.member_id = a.member_id
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        member_id=int(r["member_id"]),
        event_type=EventType(r["event_type"]),
        event_date=as_date(r["event_date"]),
        status=AttendanceStatus(r["status"]),
        service_time=ServiceTime(r["service_time"]) if r.get("service_time") else None,
        notes=r.get("notes"),
        recorded_by=int(r["recorded_by"]) if r.get("recorded_by") is not None else None,
        member_name=r.get("member_name"),
    )


def _occasion_where(occasion: Occasion) -> tuple[str, tuple]:
    if occasion.service_time is None:
        return (
            "a.event_type=%s AND a.event_date=%s AND a.service_time IS NULL",
            (occasion.event_type.value, occasion.event_date),
        )
    return (
        "a.event_type=%s AND a.event_date=%s AND a.service_time=%s",
        (occasion.event_type.value, occasion.event_date, occasion.service_time.value),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_for_occasion(self, member_id: int, occasion: Occasion) -> Optional[AttendanceRecord]:
        where, params = _occasion_where(occasion)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE a.member_id=%s AND {where} LIMIT 1", (int(member_id), *params))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def find_in_range(self, member_id: int, event_type: EventType, start: date, end: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE a.member_id=%s AND a.event_type=%s AND a.event_date BETWEEN %s AND %s
                ORDER BY a.event_date ASC
                LIMIT 1
                """,
                (int(member_id), event_type.value, start, end),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_occasion(self, occasion: Occasion) -> Sequence[AttendanceRecord]:
        where, params = _occasion_where(occasion)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {where} ORDER BY m.surname ASC, m.given_name ASC", params)
            return [_to_record(r) for r in fetchall(cur)]

    def list_by_type_between(self, event_type: EventType, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE a.event_type=%s AND a.event_date BETWEEN %s AND %s
                ORDER BY a.event_date ASC, m.surname ASC
                """,
                (event_type.value, start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_member(
        self, member_id: int, *, start: Optional[date] = None, end: Optional[date] = None
    ) -> Sequence[AttendanceRecord]:
        clauses = ["a.member_id=%s"]
        params: list = [int(member_id)]
        if start is not None:
            clauses.append("a.event_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("a.event_date <= %s")
            params.append(end)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {' AND '.join(clauses)} ORDER BY a.event_date ASC", tuple(params))
            return [_to_record(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        member_id: int,
        occasion: Occasion,
        status: AttendanceStatus,
        notes: Optional[str],
        recorded_by: Optional[int],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(member_id, event_type, event_date, service_time, status, notes, recorded_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(member_id),
                    occasion.event_type.value,
                    occasion.event_date,
                    occasion.service_time.value if occasion.service_time else None,
                    status.value,
                    notes,
                    recorded_by,
                ),
            )
            return int(cur.lastrowid)

    def update(
        self,
        attendance_id: int,
        *,
        status: AttendanceStatus,
        notes: Optional[str],
        recorded_by: Optional[int],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET status=%s, notes=%s, recorded_by=%s WHERE attendance_id=%s",
                (status.value, notes, recorded_by, int(attendance_id)),
            )
            return True
