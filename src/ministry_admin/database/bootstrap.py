from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from loguru import logger
from werkzeug.security import generate_password_hash

from ..core.constants import ADMIN_CODE_PREFIX, DEFAULT_ADMIN_PERMISSIONS, DEFAULT_ADMIN_POSITION
from .connection import DBConfig

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def _connect(config: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=config.host, port=config.port, user=config.user, password=config.password, use_pure=True)
    if with_database:
        kwargs["database"] = config.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # The target database comes from settings, not from the file.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    return re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside of quoted strings."""

    buf: list[str] = []
    quote = None
    escaped = False

    for ch in sql:
        buf.append(ch)
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_dict(db_config)
    conn = _connect(config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    """Create the database and every table (idempotent: CREATE ... IF NOT EXISTS)."""

    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info(f"Schema applied from {schema_path}")


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def ensure_admin(db_config: dict, *, name: str, email: str, password: str) -> str:
    """Create (or reset the password of) a bootstrap admin; returns its admin code."""

    email = email.strip().lower()
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT admin_code FROM admin_users WHERE email=%s", (email,))
        existing = cur.fetchone()
        if existing:
            cur.execute(
                "UPDATE admin_users SET name=%s, password_hash=%s, is_active=1 WHERE email=%s",
                (name, generate_password_hash(password), email),
            )
            conn.commit()
            return existing["admin_code"]

        cur.execute("SELECT COUNT(*) AS cnt FROM admin_users")
        code = f"{ADMIN_CODE_PREFIX}-{int(cur.fetchone()['cnt']) + 1:03d}"
        cur.execute(
            """
            INSERT INTO admin_users(admin_code, name, email, password_hash, position, role, permissions)
            VALUES(%s,%s,%s,%s,%s,'ADMIN',%s)
            """,
            (
                code,
                name,
                email,
                generate_password_hash(password),
                DEFAULT_ADMIN_POSITION,
                json.dumps(list(DEFAULT_ADMIN_PERMISSIONS)),
            ),
        )
        conn.commit()
        return code
    finally:
        conn.close()
