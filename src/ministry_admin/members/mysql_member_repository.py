from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import MemberStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone
from .model import Member, MemberChanges, NewMember
from .repository import MemberRepository

_COLUMNS = """
    member_id, surname, given_name, email, password_hash, birthdate, address,
    parent_contact, contact_number, date_joined, status, created_by
"""


def _to_member(r: dict) -> Member:
    return Member(
        member_id=int(r["member_id"]),
        surname=r["surname"],
        given_name=r["given_name"],
        email=r["email"],
        password_hash=r["password_hash"],
        birthdate=as_date(r.get("birthdate")),
        address=r.get("address"),
        parent_contact=r.get("parent_contact"),
        contact_number=r.get("contact_number"),
        date_joined=as_date(r.get("date_joined")),
        status=MemberStatus(r["status"]),
        created_by=int(r["created_by"]) if r.get("created_by") is not None else None,
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, member_id: int) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE member_id=%s", (int(member_id),))
            r = fetchone(cur)
            return _to_member(r) if r else None

    def get_by_email(self, email: str) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE email=%s", (email,))
            r = fetchone(cur)
            return _to_member(r) if r else None

    def list_members(self, *, status: Optional[MemberStatus] = None) -> Sequence[Member]:
        where = ""
        params: tuple = ()
        if status is not None:
            where = "WHERE status=%s"
            params = (status.value,)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members {where} ORDER BY surname ASC, given_name ASC", params)
            return [_to_member(r) for r in fetchall(cur)]

    def create(self, new: NewMember) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO members(
                    surname, given_name, email, password_hash, birthdate, address,
                    parent_contact, contact_number, date_joined, status, created_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    new.surname,
                    new.given_name,
                    new.email,
                    new.password_hash,
                    new.birthdate,
                    new.address,
                    new.parent_contact,
                    new.contact_number,
                    new.date_joined,
                    MemberStatus.ACTIVE.value,
                    new.created_by,
                ),
            )
            return int(cur.lastrowid)

    def update(self, member_id: int, changes: MemberChanges) -> bool:
        columns = changes.as_columns()
        if not columns:
            return True

        assignments = ", ".join(f"{col}=%s" for col in columns)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE members SET {assignments} WHERE member_id=%s",
                (*columns.values(), int(member_id)),
            )
            return True

    def set_status(self, member_id: int, status: MemberStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE members SET status=%s WHERE member_id=%s", (status.value, int(member_id)))
            return cur.rowcount > 0
