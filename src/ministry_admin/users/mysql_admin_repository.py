from __future__ import annotations

import json
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone, load_json_list
from .model import AdminUser, NewAdmin
from .repository import AdminUserRepository, SettingsRepository

_COLUMNS = """
    admin_id, admin_code, name, email, password_hash, position, contact_number,
    birthdate, role, permissions, is_active
"""


def _to_admin(r: dict) -> AdminUser:
    return AdminUser(
        admin_id=int(r["admin_id"]),
        admin_code=r["admin_code"],
        name=r["name"],
        email=r["email"],
        password_hash=r["password_hash"],
        position=r.get("position"),
        contact_number=r.get("contact_number"),
        birthdate=as_date(r.get("birthdate")),
        role=Role(r.get("role") or Role.ADMIN.value),
        permissions=load_json_list(r.get("permissions")),
        is_active=bool(r.get("is_active", True)),
    )


class MySQLAdminUserRepository(AdminUserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, admin_id: int) -> Optional[AdminUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM admin_users WHERE admin_id=%s", (int(admin_id),))
            r = fetchone(cur)
            return _to_admin(r) if r else None

    def get_by_email(self, email: str) -> Optional[AdminUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM admin_users WHERE email=%s", (email,))
            r = fetchone(cur)
            return _to_admin(r) if r else None

    def count_admins(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS cnt FROM admin_users")
            r = fetchone(cur)
            return int(r["cnt"]) if r else 0

    def list_active(self) -> Sequence[AdminUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM admin_users WHERE is_active=1 ORDER BY name ASC")
            return [_to_admin(r) for r in fetchall(cur)]

    def create(self, new: NewAdmin) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO admin_users(
                    admin_code, name, email, password_hash, position,
                    contact_number, birthdate, role, permissions
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    new.admin_code,
                    new.name,
                    new.email,
                    new.password_hash,
                    new.position,
                    new.contact_number,
                    new.birthdate,
                    Role.ADMIN.value,
                    json.dumps(list(new.permissions)),
                ),
            )
            return int(cur.lastrowid)


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_setting(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT setting_value FROM system_settings WHERE setting_key=%s", (key,))
            r = fetchone(cur)
            return r["setting_value"] if r else None

    def set_setting(self, key: str, value: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO system_settings(setting_key, setting_value)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE setting_value=VALUES(setting_value)
                """,
                (key, value),
            )
