from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import FinancialType, PaymentMethod, PaymentStatus

TERMINAL_STATUSES = frozenset({PaymentStatus.PAID, PaymentStatus.WAIVED})


@dataclass(frozen=True)
class FinancialRecord:
    """Domain entity: a due owed by a member, or an expense they filed."""

    record_id: int
    member_id: int
    record_type: FinancialType
    title: str
    amount: Decimal
    status: PaymentStatus
    transaction_date: date
    description: Optional[str] = None
    category: Optional[str] = None
    due_date: Optional[date] = None
    paid_date: Optional[date] = None
    payment_method: Optional[PaymentMethod] = None
    reference: Optional[str] = None
    notes: Optional[str] = None
    recorded_by: Optional[int] = None
    member_name: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def sort_date(self) -> date:
        return self.due_date or self.transaction_date


@dataclass(frozen=True)
class NewFinancialRecord:
    member_id: int
    record_type: FinancialType
    title: str
    amount: Decimal
    transaction_date: date
    status: PaymentStatus = PaymentStatus.PENDING
    description: Optional[str] = None
    category: Optional[str] = None
    due_date: Optional[date] = None
    paid_date: Optional[date] = None
    payment_method: Optional[PaymentMethod] = None
    recorded_by: Optional[int] = None


@dataclass(frozen=True)
class Payment:
    """Metadata captured when a due is settled."""

    paid_date: date
    payment_method: PaymentMethod
    reference: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class MemberYearDues:
    __json_extra__ = ("total",)

    member_id: int
    member_name: str
    payments: tuple[FinancialRecord, ...]

    @property
    def total(self) -> Decimal:
        return sum((p.amount for p in self.payments), Decimal("0"))
