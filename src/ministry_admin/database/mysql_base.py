from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def as_date(value: Any) -> Optional[date]:
    """DATE/DATETIME columns come back as date or datetime depending on the column."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    return value


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME columns arrive as time, timedelta or 'HH:MM[:SS]' depending on the connector."""

    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        minutes, seconds = divmod(int(value.total_seconds()) % 86400, 60)
        hours, minutes = divmod(minutes, 60)
        return time(hours, minutes, seconds)
    if isinstance(value, str):
        return time(*(int(p) for p in value.strip().split(":")[:3]))
    raise TypeError(f"Unsupported TIME value: {value!r}")


def in_clause(values) -> tuple[str, tuple]:
    """Build a parameterised ``IN (...)`` fragment."""

    values = tuple(values)
    if not values:
        return "(NULL)", ()
    return "(" + ",".join(["%s"] * len(values)) + ")", values


def load_json_list(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    return tuple(str(v) for v in json.loads(value))
