from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class AdminUser:
    """Domain entity: an administrator account.

    Admins live in their own table, parallel to members.
    """

    __json_exclude__ = ("password_hash",)

    admin_id: int
    admin_code: str
    name: str
    email: str
    password_hash: str
    position: Optional[str] = None
    contact_number: Optional[str] = None
    birthdate: Optional[date] = None
    role: Role = Role.ADMIN
    permissions: tuple[str, ...] = ()
    is_active: bool = True


@dataclass(frozen=True)
class NewAdmin:
    admin_code: str
    name: str
    email: str
    password_hash: str
    position: str
    permissions: tuple[str, ...]
    contact_number: Optional[str] = None
    birthdate: Optional[date] = None


@dataclass(frozen=True)
class RegistrationStatus:
    has_admin: bool
    registration_disabled: bool

    @property
    def is_open(self) -> bool:
        return not self.has_admin and not self.registration_disabled
