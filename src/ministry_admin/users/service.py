from __future__ import annotations

from typing import Optional

from loguru import logger
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import (
    ADMIN_CODE_PREFIX,
    DEFAULT_ADMIN_PERMISSIONS,
    DEFAULT_ADMIN_POSITION,
    PASSWORD_MIN_LENGTH,
    REGISTRATION_DISABLED_KEY,
)
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..core.identity import AdminIdentity, Identity, MemberIdentity, require_admin
from ..members.repository import MemberRepository
from .model import AdminUser, NewAdmin, RegistrationStatus
from .repository import AdminUserRepository, SettingsRepository


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # unknown hash method, e.g. a placeholder value
        return False


class AuthService:
    """Use case: authenticate a login (admins first, then members)."""

    def __init__(self, admins: AdminUserRepository, members: MemberRepository):
        self._admins = admins
        self._members = members

    def authenticate(self, email: str, password: str) -> Identity:
        email = (email or "").strip().lower()
        if not email or not password:
            raise ValidationError("Email and password are required")

        admin = self._admins.get_by_email(email)
        if admin:
            if not admin.is_active or not _password_matches(admin.password_hash, password):
                raise AuthenticationError("Invalid email or password")
            logger.info(f"Admin {admin.admin_id} logged in")
            return AdminIdentity(user_id=admin.admin_id, name=admin.name, email=admin.email)

        member = self._members.get_by_email(email)
        if not member or not member.is_active or not _password_matches(member.password_hash, password):
            raise AuthenticationError("Invalid email or password")

        logger.info(f"Member {member.member_id} logged in")
        return MemberIdentity(user_id=member.member_id, name=member.full_name, email=member.email)


class RegistrationService:
    """Use cases: first-admin sign-up, admin-created admins, registration lock."""

    def __init__(self, admins: AdminUserRepository, members: MemberRepository, settings: SettingsRepository):
        self._admins = admins
        self._members = members
        self._settings = settings

    def status(self) -> RegistrationStatus:
        disabled = (self._settings.get_setting(REGISTRATION_DISABLED_KEY) or "").lower() == "true"
        return RegistrationStatus(has_admin=self._admins.count_admins() > 0, registration_disabled=disabled)

    def _next_admin_code(self) -> str:
        return f"{ADMIN_CODE_PREFIX}-{self._admins.count_admins() + 1:03d}"

    def _create_admin(
        self,
        *,
        name: str,
        email: str,
        password: str,
        position: Optional[str],
        contact_number: Optional[str],
    ) -> AdminUser:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", PASSWORD_MIN_LENGTH)

        if self._admins.get_by_email(email) or self._members.get_by_email(email):
            raise ConflictError("An account with this email already exists")

        admin_id = self._admins.create(
            NewAdmin(
                admin_code=self._next_admin_code(),
                name=name,
                email=email,
                password_hash=generate_password_hash(password),
                position=(position or "").strip() or DEFAULT_ADMIN_POSITION,
                permissions=DEFAULT_ADMIN_PERMISSIONS,
                contact_number=(contact_number or "").strip() or None,
            )
        )
        admin = self._admins.get_by_id(admin_id)
        if not admin:
            raise NotFoundError("Admin not found")
        return admin

    def register_first_admin(
        self,
        *,
        name: str,
        email: str,
        password: str,
        position: Optional[str] = None,
        contact_number: Optional[str] = None,
    ) -> AdminUser:
        status = self.status()
        if status.registration_disabled:
            raise AuthorizationError("Registration is disabled")
        if status.has_admin:
            raise AuthorizationError("Admin registration is closed. An admin already exists.")

        admin = self._create_admin(
            name=name, email=email, password=password, position=position, contact_number=contact_number
        )
        logger.info(f"First admin {admin.admin_code} registered")
        return admin

    def register_admin(
        self,
        caller: Identity,
        *,
        name: str,
        email: str,
        password: str,
        position: Optional[str] = None,
        contact_number: Optional[str] = None,
    ) -> AdminUser:
        by = require_admin(caller)
        admin = self._create_admin(
            name=name, email=email, password=password, position=position, contact_number=contact_number
        )
        logger.info(f"Admin {admin.admin_code} registered by admin {by.user_id}")
        return admin

    def disable_registration(self, caller: Identity) -> RegistrationStatus:
        by = require_admin(caller)
        if self._admins.count_admins() == 0:
            raise ValidationError("Cannot disable registration before an admin exists")

        self._settings.set_setting(REGISTRATION_DISABLED_KEY, "true")
        logger.info(f"Registration disabled by admin {by.user_id}")
        return self.status()
