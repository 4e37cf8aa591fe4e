"""Dues filtering and per-status totals."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from ..core.enums import PaymentStatus
from .model import FinancialRecord

ZERO = Decimal("0")


@dataclass(frozen=True)
class DuesTotals:
    pending: Decimal = ZERO
    paid: Decimal = ZERO
    overdue: Decimal = ZERO
    waived: Decimal = ZERO
    total: Decimal = ZERO


def filter_dues(
    records: Iterable[FinancialRecord],
    *,
    member_id: Optional[int] = None,
    status: Optional[PaymentStatus] = None,
    search: Optional[str] = None,
) -> list[FinancialRecord]:
    """Apply the optional filters and sort by due date, newest first.

    ``search`` matches the title or the member's name, ignoring case.
    """

    needle = (search or "").strip().lower()
    out = []
    for r in records:
        if member_id is not None and r.member_id != member_id:
            continue
        if status is not None and r.status != status:
            continue
        if needle and needle not in r.title.lower() and needle not in (r.member_name or "").lower():
            continue
        out.append(r)

    out.sort(key=lambda r: (r.sort_date, r.record_id), reverse=True)
    return out


def compute_totals(records: Iterable[FinancialRecord]) -> DuesTotals:
    buckets = {s: ZERO for s in PaymentStatus}
    for r in records:
        buckets[r.status] += r.amount

    return DuesTotals(
        pending=buckets[PaymentStatus.PENDING],
        paid=buckets[PaymentStatus.PAID],
        overdue=buckets[PaymentStatus.OVERDUE],
        waived=buckets[PaymentStatus.WAIVED],
        total=sum(buckets.values(), ZERO),
    )
