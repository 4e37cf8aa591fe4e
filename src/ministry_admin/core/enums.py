from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Caller role used for authorization."""

    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class MemberStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class ServiceLevel(str, Enum):
    """Tiers derived from whole years since investiture."""

    NEOPHYTE = "NEOPHYTE"
    JUNIOR = "JUNIOR"
    SENIOR = "SENIOR"


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    EXCUSED = "EXCUSED"


class EventType(str, Enum):
    SUNDAY_MASS = "SUNDAY_MASS"
    DAILY_MASS = "DAILY_MASS"
    MONTHLY_MEETING = "MONTHLY_MEETING"
    SPECIAL_EVENT = "SPECIAL_EVENT"
    TRAINING = "TRAINING"
    RETREAT = "RETREAT"


class ServiceTime(str, Enum):
    AM = "AM"
    PM = "PM"


class FinancialType(str, Enum):
    DUES = "DUES"
    EXPENSE = "EXPENSE"


class PaymentStatus(str, Enum):
    """Dues lifecycle. PAID and WAIVED are terminal."""

    PENDING = "PENDING"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    WAIVED = "WAIVED"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    GCASH = "GCASH"
    BANK_TRANSFER = "BANK_TRANSFER"
    CHECK = "CHECK"


class EventStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class NotificationType(str, Enum):
    ANNOUNCEMENT = "ANNOUNCEMENT"
    BIRTHDAY = "BIRTHDAY"
    EVENT_REMINDER = "EVENT_REMINDER"
    DUES_REMINDER = "DUES_REMINDER"
    SCHEDULE_CHANGE = "SCHEDULE_CHANGE"


class TargetType(str, Enum):
    ALL_MEMBERS = "ALL_MEMBERS"
    ADMINS_ONLY = "ADMINS_ONLY"
    SPECIFIC_MEMBER = "SPECIFIC_MEMBER"


class Priority(str, Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
