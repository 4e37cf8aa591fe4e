from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import MemberStatus, ServiceLevel
from .service_level import derive_service_level, years_of_service


@dataclass(frozen=True)
class Member:
    """Domain entity: a ministry member.

    The service level is not a field: it is derived from ``date_joined`` on
    every read so it can never drift from the calendar.
    """

    __json_exclude__ = ("password_hash",)

    member_id: int
    surname: str
    given_name: str
    email: str
    password_hash: str
    birthdate: Optional[date]
    address: Optional[str]
    parent_contact: Optional[str]
    contact_number: Optional[str]
    date_joined: Optional[date]
    status: MemberStatus = MemberStatus.ACTIVE
    created_by: Optional[int] = None

    @property
    def full_name(self) -> str:
        return f"{self.given_name} {self.surname}"

    @property
    def is_active(self) -> bool:
        return self.status == MemberStatus.ACTIVE

    def service_level(self, today: date) -> ServiceLevel:
        return derive_service_level(self.date_joined, today)

    def years_of_service(self, today: date) -> int:
        return years_of_service(self.date_joined, today)


@dataclass(frozen=True)
class MemberView:
    """Read-model returned to clients: member plus values derived for ``today``."""

    member: Member
    service_level: ServiceLevel
    years_of_service: int

    @classmethod
    def of(cls, member: Member, today: date) -> "MemberView":
        return cls(
            member=member,
            service_level=member.service_level(today),
            years_of_service=member.years_of_service(today),
        )

    def as_dict(self) -> dict:
        m = self.member
        return {
            "id": m.member_id,
            "surname": m.surname,
            "givenName": m.given_name,
            "fullName": m.full_name,
            "email": m.email,
            "birthdate": m.birthdate.isoformat() if m.birthdate else None,
            "address": m.address,
            "parentContact": m.parent_contact,
            "contactNumber": m.contact_number,
            "dateJoined": m.date_joined.isoformat() if m.date_joined else None,
            "memberStatus": m.status.value,
            "serviceLevel": self.service_level.value,
            "yearsOfService": self.years_of_service,
        }


@dataclass(frozen=True)
class NewMember:
    surname: str
    given_name: str
    email: str
    password_hash: str
    birthdate: date
    address: str
    parent_contact: str
    date_joined: date
    contact_number: Optional[str] = None
    created_by: Optional[int] = None


@dataclass(frozen=True)
class MemberChanges:
    """Partial update; ``None`` leaves a field untouched."""

    surname: Optional[str] = None
    given_name: Optional[str] = None
    email: Optional[str] = None
    contact_number: Optional[str] = None
    birthdate: Optional[date] = None
    address: Optional[str] = None
    status: Optional[MemberStatus] = None

    def as_columns(self) -> dict:
        values = {
            "surname": self.surname,
            "given_name": self.given_name,
            "email": self.email,
            "contact_number": self.contact_number,
            "birthdate": self.birthdate,
            "address": self.address,
            "status": self.status.value if self.status else None,
        }
        return {k: v for k, v in values.items() if v is not None}
