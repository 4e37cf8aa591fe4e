from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import FinancialType, PaymentStatus
from .model import FinancialRecord, NewFinancialRecord, Payment


class FinancialRepository(Protocol):
    """Repository interface for dues and expense records."""

    def get_by_id(self, record_id: int) -> Optional[FinancialRecord]:
        raise NotImplementedError

    def list_records(
        self,
        *,
        record_types: Iterable[FinancialType] = (FinancialType.DUES,),
        member_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> Sequence[FinancialRecord]:
        """Records with ``transaction_date`` in [start, end], newest first."""

        raise NotImplementedError

    def find_dues_due_between(self, member_id: int, start: date, end: date) -> Optional[FinancialRecord]:
        raise NotImplementedError

    def create(self, new: NewFinancialRecord) -> int:
        raise NotImplementedError

    def set_status(
        self,
        record_id: int,
        status: PaymentStatus,
        *,
        payment: Optional[Payment] = None,
        amount: Optional[Decimal] = None,
    ) -> bool:
        raise NotImplementedError
