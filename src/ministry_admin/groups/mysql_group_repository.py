from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import MinistryGroup, NewGroup
from .repository import GroupRepository

_COLUMNS = "group_id, name, description, leader_member_id, meeting_time, location"


def _to_group(r: dict, member_ids: Sequence[int] = ()) -> MinistryGroup:
    return MinistryGroup(
        group_id=int(r["group_id"]),
        name=r["name"],
        description=r.get("description"),
        leader_member_id=int(r["leader_member_id"]) if r.get("leader_member_id") is not None else None,
        meeting_time=r.get("meeting_time"),
        location=r.get("location"),
        member_ids=tuple(member_ids),
    )


class MySQLGroupRepository(GroupRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _with_members(self, cur, rows: list[dict]) -> list[MinistryGroup]:
        if not rows:
            return []
        ids_sql, ids = in_clause(int(r["group_id"]) for r in rows)
        cur.execute(
            f"SELECT group_id, member_id FROM group_members WHERE group_id IN {ids_sql} ORDER BY added_at ASC",
            ids,
        )
        members: dict[int, list[int]] = {}
        for m in fetchall(cur):
            members.setdefault(int(m["group_id"]), []).append(int(m["member_id"]))
        return [_to_group(r, members.get(int(r["group_id"]), ())) for r in rows]

    def get_by_id(self, group_id: int) -> Optional[MinistryGroup]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM ministry_groups WHERE group_id=%s", (int(group_id),))
            r = fetchone(cur)
            return self._with_members(cur, [r])[0] if r else None

    def list_groups(self) -> Sequence[MinistryGroup]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM ministry_groups ORDER BY name ASC")
            return self._with_members(cur, fetchall(cur))

    def create(self, new: NewGroup) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO ministry_groups(name, description, leader_member_id, meeting_time, location)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (new.name, new.description, new.leader_member_id, new.meeting_time, new.location),
            )
            return int(cur.lastrowid)

    def delete(self, group_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM ministry_groups WHERE group_id=%s", (int(group_id),))
            return cur.rowcount > 0

    def add_member(self, group_id: int, member_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO group_members(group_id, member_id) VALUES(%s,%s)",
                (int(group_id), int(member_id)),
            )
            return cur.rowcount > 0

    def remove_member(self, group_id: int, member_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM group_members WHERE group_id=%s AND member_id=%s",
                (int(group_id), int(member_id)),
            )
            return cur.rowcount > 0
