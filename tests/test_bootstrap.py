from __future__ import annotations

from datetime import date, datetime, time, timedelta
from pathlib import Path

from ministry_admin.database.bootstrap import SCHEMA_PATH, _strip_create_db_and_use, iter_sql_statements
from ministry_admin.database.mysql_base import as_date, in_clause, load_json_list, normalize_mysql_time


def test_iter_sql_statements_ignores_semicolons_in_strings():
    sql = "INSERT INTO t VALUES ('a;b');\nSELECT 1;\n  \nSELECT \"x;y\""

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        "SELECT 1",
        'SELECT "x;y"',
    ]


def test_iter_sql_statements_handles_escaped_quotes():
    sql = "INSERT INTO t VALUES ('it\\'s; fine');SELECT 2;"
    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('it\\'s; fine')", "SELECT 2"]


def test_strip_create_db_and_use():
    sql = "CREATE DATABASE IF NOT EXISTS ministry_db;\nUSE ministry_db;\nCREATE TABLE a (id INT);\n"

    stripped = _strip_create_db_and_use(sql)

    assert "CREATE DATABASE" not in stripped
    assert "USE ministry_db" not in stripped
    assert list(iter_sql_statements(stripped)) == ["CREATE TABLE a (id INT)"]


def test_schema_defines_every_table():
    sql = SCHEMA_PATH.read_text(encoding="utf-8").lower()
    for table in (
        "admin_users",
        "members",
        "attendance_records",
        "financial_records",
        "ministry_events",
        "notifications",
        "ministry_groups",
        "group_members",
        "system_settings",
    ):
        assert f"create table if not exists {table}" in sql


def test_mysql_value_helpers():
    assert normalize_mysql_time(timedelta(hours=14, minutes=5)) == time(14, 5)
    assert normalize_mysql_time("08:30:00") == time(8, 30)
    assert normalize_mysql_time(None) is None
    assert as_date(datetime(2026, 10, 19, 8, 0)) == date(2026, 10, 19)
    assert in_clause([3, 4]) == ("(%s,%s)", (3, 4))
    assert in_clause([]) == ("(NULL)", ())
    assert load_json_list('["manage_members", "view_reports"]') == ("manage_members", "view_reports")
    assert load_json_list(None) == ()


def test_schema_ships_inside_the_package():
    from ministry_admin.database import bootstrap

    assert SCHEMA_PATH.is_file()
    assert SCHEMA_PATH.parent == Path(bootstrap.__file__).resolve().parent
