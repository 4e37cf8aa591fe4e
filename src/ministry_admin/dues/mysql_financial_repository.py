from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..core.enums import FinancialType, PaymentMethod, PaymentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone, in_clause
from .model import FinancialRecord, NewFinancialRecord, Payment
from .repository import FinancialRepository

_SELECT = """
    SELECT f.record_id, f.member_id, f.record_type, f.title, f.description, f.category,
           f.amount, f.due_date, f.paid_date, f.status, f.payment_method, f.reference,
           f.notes, f.transaction_date, f.recorded_by,
           CONCAT(m.given_name, ' ', m.surname) AS member_name
    FROM financial_records f
    JOIN members m ON m.member_id = f.member_id
"""


def _to_record(r: dict) -> FinancialRecord:
    return FinancialRecord(
        record_id=int(r["record_id"]),
        member_id=int(r["member_id"]),
        record_type=FinancialType(r["record_type"]),
        title=r["title"],
        amount=Decimal(str(r["amount"])),
        status=PaymentStatus(r["status"]),
        transaction_date=as_date(r["transaction_date"]),
        description=r.get("description"),
        category=r.get("category"),
        due_date=as_date(r.get("due_date")),
        paid_date=as_date(r.get("paid_date")),
        payment_method=PaymentMethod(r["payment_method"]) if r.get("payment_method") else None,
        reference=r.get("reference"),
        notes=r.get("notes"),
        recorded_by=int(r["recorded_by"]) if r.get("recorded_by") is not None else None,
        member_name=r.get("member_name"),
    )


class MySQLFinancialRepository(FinancialRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: int) -> Optional[FinancialRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE f.record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_records(
        self,
        *,
        record_types: Iterable[FinancialType] = (FinancialType.DUES,),
        member_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> Sequence[FinancialRecord]:
        types_sql, types_params = in_clause(t.value for t in record_types)
        clauses = [f"f.record_type IN {types_sql}"]
        params: list = list(types_params)
        if member_id is not None:
            clauses.append("f.member_id=%s")
            params.append(int(member_id))
        if start is not None:
            clauses.append("f.transaction_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("f.transaction_date <= %s")
            params.append(end)

        sql = f"{_SELECT} WHERE {' AND '.join(clauses)} ORDER BY f.transaction_date DESC, f.record_id DESC"
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_record(r) for r in fetchall(cur)]

    def find_dues_due_between(self, member_id: int, start: date, end: date) -> Optional[FinancialRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE f.member_id=%s AND f.record_type=%s AND f.due_date BETWEEN %s AND %s
                ORDER BY f.record_id ASC
                LIMIT 1
                """,
                (int(member_id), FinancialType.DUES.value, start, end),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create(self, new: NewFinancialRecord) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO financial_records(
                    member_id, record_type, title, description, category, amount,
                    due_date, paid_date, status, payment_method, transaction_date, recorded_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(new.member_id),
                    new.record_type.value,
                    new.title,
                    new.description,
                    new.category,
                    new.amount,
                    new.due_date,
                    new.paid_date,
                    new.status.value,
                    new.payment_method.value if new.payment_method else None,
                    new.transaction_date,
                    new.recorded_by,
                ),
            )
            return int(cur.lastrowid)

    def set_status(
        self,
        record_id: int,
        status: PaymentStatus,
        *,
        payment: Optional[Payment] = None,
        amount: Optional[Decimal] = None,
    ) -> bool:
        assignments = ["status=%s"]
        params: list = [status.value]
        if payment is not None:
            assignments += ["paid_date=%s", "payment_method=%s", "reference=%s", "notes=%s"]
            params += [payment.paid_date, payment.payment_method.value, payment.reference, payment.notes]
        if amount is not None:
            assignments.append("amount=%s")
            params.append(amount)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE financial_records SET {', '.join(assignments)} WHERE record_id=%s",
                (*params, int(record_id)),
            )
            return cur.rowcount > 0
