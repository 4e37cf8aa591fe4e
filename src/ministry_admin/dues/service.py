from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Optional, Union

from loguru import logger

from ..common.datetime_utils import month_bounds, parse_iso_date, today_local
from ..common.validators import require_enum, require_non_empty, require_positive_amount
from ..core.constants import DEFAULT_EXPENSE_HISTORY_LIMIT
from ..core.enums import FinancialType, MemberStatus, PaymentMethod, PaymentStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..core.identity import Identity, require_admin, require_member
from ..members.repository import MemberRepository
from ..notifications.service import NotificationService
from .model import FinancialRecord, MemberYearDues, NewFinancialRecord, Payment
from .repository import FinancialRepository
from .totals import DuesTotals, compute_totals, filter_dues

ALL_MEMBERS = "ALL"

_EXPENSE_STATUS_LABELS = {
    PaymentStatus.PAID: "approved",
    PaymentStatus.PENDING: "pending",
    PaymentStatus.OVERDUE: "rejected",
    PaymentStatus.WAIVED: "rejected",
}


@dataclass(frozen=True)
class DuesListing:
    records: list[FinancialRecord]
    totals: DuesTotals


@dataclass(frozen=True)
class ExpenseItem:
    """A member's own view of one of their financial records."""

    id: int
    description: str
    amount: Decimal
    date: date
    category: str
    status: str

    @classmethod
    def of(cls, record: FinancialRecord) -> "ExpenseItem":
        return cls(
            id=record.record_id,
            description=record.description or record.title,
            amount=record.amount,
            date=record.transaction_date,
            category=record.category or record.record_type.value,
            status=_EXPENSE_STATUS_LABELS.get(record.status, "pending"),
        )


class DuesService:
    """Use cases: the dues ledger (admin) and expense history/requests (member)."""

    def __init__(
        self,
        records: FinancialRepository,
        members: MemberRepository,
        notifications: NotificationService,
        *,
        clock: Callable[[], date] = today_local,
    ):
        self._records = records
        self._members = members
        self._notifications = notifications
        self._clock = clock

    def _require(self, record_id: int) -> FinancialRecord:
        record = self._records.get_by_id(int(record_id))
        if not record or record.record_type != FinancialType.DUES:
            raise NotFoundError("Due not found")
        return record

    def _reload(self, record_id: int) -> FinancialRecord:
        record = self._records.get_by_id(record_id)
        if not record:
            raise NotFoundError("Due not found")
        return record

    def list_dues(
        self,
        caller: Identity,
        *,
        member_id: Optional[int] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> DuesListing:
        require_admin(caller)
        status_filter = require_enum(PaymentStatus, status, "Status") if status else None
        records = filter_dues(
            self._records.list_records(record_types=(FinancialType.DUES,)),
            member_id=member_id,
            status=status_filter,
            search=search,
        )
        return DuesListing(records=records, totals=compute_totals(records))

    def create_dues(
        self,
        caller: Identity,
        *,
        member_id: Union[int, str],
        title: str,
        amount,
        due_date: str,
        description: Optional[str] = None,
        category: Optional[str] = None,
    ) -> list[FinancialRecord]:
        """Create one due for a member, or one per active member when ``member_id`` is "ALL"."""

        admin = require_admin(caller)
        title = require_non_empty(title, "Title")
        amount = require_positive_amount(amount)
        due = parse_iso_date(require_non_empty(due_date, "Due date"))

        if str(member_id).upper() == ALL_MEMBERS:
            targets = [m.member_id for m in self._members.list_members(status=MemberStatus.ACTIVE)]
            if not targets:
                raise ValidationError("There are no active members")
        else:
            try:
                target = self._members.get_by_id(int(member_id))
            except (TypeError, ValueError):
                raise ValidationError("Member is required")
            if not target:
                raise NotFoundError("Member not found")
            targets = [target.member_id]

        created = []
        for target_id in targets:
            record_id = self._records.create(
                NewFinancialRecord(
                    member_id=target_id,
                    record_type=FinancialType.DUES,
                    title=title,
                    amount=amount,
                    transaction_date=self._clock(),
                    description=(description or "").strip() or None,
                    category=(category or "").strip() or None,
                    due_date=due,
                    recorded_by=admin.user_id,
                )
            )
            self._notifications.notify_dues(target_id, amount)
            created.append(self._reload(record_id))

        logger.info(f"Admin {admin.user_id} created {len(created)} due(s) '{title}'")
        return created

    def mark_paid(
        self,
        caller: Identity,
        record_id: int,
        *,
        paid_date: Optional[str],
        payment_method: Optional[str],
        reference: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> FinancialRecord:
        admin = require_admin(caller)
        record = self._require(record_id)
        if record.is_terminal:
            raise ValidationError(f"Cannot mark a {record.status.value} due as paid")

        payment = Payment(
            paid_date=parse_iso_date(require_non_empty(paid_date, "Paid date")),
            payment_method=require_enum(PaymentMethod, require_non_empty(payment_method, "Payment method"), "Payment method"),
            reference=(reference or "").strip() or None,
            notes=(notes or "").strip() or None,
        )
        self._records.set_status(record.record_id, PaymentStatus.PAID, payment=payment)
        logger.info(f"Due {record.record_id} marked paid by admin {admin.user_id}")
        return self._reload(record.record_id)

    def waive(self, caller: Identity, record_id: int) -> FinancialRecord:
        admin = require_admin(caller)
        record = self._require(record_id)
        if record.is_terminal:
            raise ValidationError(f"Cannot waive a {record.status.value} due")

        self._records.set_status(record.record_id, PaymentStatus.WAIVED)
        logger.info(f"Due {record.record_id} waived by admin {admin.user_id}")
        return self._reload(record.record_id)

    def mark_overdue(self, caller: Identity, record_id: int) -> FinancialRecord:
        admin = require_admin(caller)
        record = self._require(record_id)
        if record.status != PaymentStatus.PENDING:
            raise ValidationError("Only pending dues can become overdue")

        self._records.set_status(record.record_id, PaymentStatus.OVERDUE)
        logger.info(f"Due {record.record_id} marked overdue by admin {admin.user_id}")
        return self._reload(record.record_id)

    def record_monthly_payment(
        self, *, admin_id: int, member_id: int, year: int, month: int, amount: Decimal
    ) -> Optional[FinancialRecord]:
        """Upsert the member's dues for a month as PAID (monthly meeting collection).

        A PAID or WAIVED due for that month is left untouched and ``None`` is returned.
        """

        start, end = month_bounds(year, month)
        today = self._clock()
        payment = Payment(paid_date=today, payment_method=PaymentMethod.CASH)

        existing = self._records.find_dues_due_between(member_id, start, end)
        if existing and existing.is_terminal:
            logger.info(f"Due {existing.record_id} is {existing.status.value}; monthly collection skipped")
            return None
        if existing:
            self._records.set_status(existing.record_id, PaymentStatus.PAID, payment=payment, amount=amount)
            return self._reload(existing.record_id)

        record_id = self._records.create(
            NewFinancialRecord(
                member_id=member_id,
                record_type=FinancialType.DUES,
                title=f"Monthly dues for {start:%B %Y}",
                amount=amount,
                transaction_date=today,
                status=PaymentStatus.PAID,
                due_date=start,
                paid_date=today,
                payment_method=PaymentMethod.CASH,
                recorded_by=admin_id,
            )
        )
        return self._reload(record_id)

    def monthly_payment(self, member_id: int, year: int, month: int) -> Optional[FinancialRecord]:
        start, end = month_bounds(year, month)
        return self._records.find_dues_due_between(member_id, start, end)

    def yearly_dues(self, caller: Identity, year: Optional[int] = None) -> tuple[int, list[MemberYearDues]]:
        """Dues with a transaction date in ``year`` (default: this year), grouped by member."""

        require_admin(caller)
        year = int(year or self._clock().year)
        records = self._records.list_records(
            record_types=(FinancialType.DUES,), start=date(year, 1, 1), end=date(year, 12, 31)
        )

        grouped: dict[int, list[FinancialRecord]] = {}
        names: dict[int, str] = {}
        for r in sorted(records, key=lambda r: (r.transaction_date, r.record_id)):
            grouped.setdefault(r.member_id, []).append(r)
            names.setdefault(r.member_id, r.member_name or "Unknown")

        return year, [
            MemberYearDues(member_id=member_id, member_name=names[member_id], payments=tuple(payments))
            for member_id, payments in grouped.items()
        ]

    def member_expenses(self, caller: Identity, *, limit: int = DEFAULT_EXPENSE_HISTORY_LIMIT) -> list[ExpenseItem]:
        me = require_member(caller)
        records = self._records.list_records(
            record_types=(FinancialType.EXPENSE, FinancialType.DUES), member_id=me.user_id, limit=limit
        )
        return [ExpenseItem.of(r) for r in records]

    def request_expense(
        self, caller: Identity, *, description: str, amount, category: Optional[str] = None
    ) -> ExpenseItem:
        me = require_member(caller)
        description = require_non_empty(description, "Description")
        amount = require_positive_amount(amount)

        record_id = self._records.create(
            NewFinancialRecord(
                member_id=me.user_id,
                record_type=FinancialType.EXPENSE,
                title=description[:150],
                amount=amount,
                transaction_date=self._clock(),
                description=description,
                category=(category or "").strip() or "General",
            )
        )
        logger.info(f"Member {me.user_id} filed expense request {record_id}")
        return ExpenseItem.of(self._reload(record_id))
