from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from loguru import logger
from werkzeug.security import generate_password_hash

from ..common.datetime_utils import parse_iso_date, parse_optional_date, today_local
from ..common.validators import require_email, require_enum, require_min_length, require_non_empty
from ..core.constants import MEMBER_EMAIL_DOMAIN, PASSWORD_MIN_LENGTH
from ..core.enums import MemberStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..core.identity import Identity, require_admin, require_member
from .model import Member, MemberChanges, MemberView, NewMember
from .repository import MemberRepository


class MemberService:
    """Use cases: manage the member roster (admin) and read one's own profile (member)."""

    def __init__(
        self,
        members: MemberRepository,
        *,
        email_domain: str = MEMBER_EMAIL_DOMAIN,
        clock: Callable[[], date] = today_local,
    ):
        self._members = members
        self._email_domain = email_domain
        self._clock = clock

    def _view(self, member: Member) -> MemberView:
        return MemberView.of(member, self._clock())

    def _require(self, member_id: int) -> Member:
        member = self._members.get_by_id(int(member_id))
        if not member:
            raise NotFoundError("Member not found")
        return member

    def list_members(self, caller: Identity, *, status: Optional[str] = None) -> list[MemberView]:
        require_admin(caller)
        status_filter = require_enum(MemberStatus, status, "Status") if status else None
        return [self._view(m) for m in self._members.list_members(status=status_filter)]

    def get_member(self, caller: Identity, member_id: int) -> MemberView:
        require_admin(caller)
        return self._view(self._require(member_id))

    def create_member(
        self,
        caller: Identity,
        *,
        surname: str,
        given_name: str,
        birthday: str,
        address: str,
        parent_contact: str,
        date_of_investiture: str,
        username: str,
        password: str,
        email: Optional[str] = None,
        contact_number: Optional[str] = None,
    ) -> MemberView:
        admin = require_admin(caller)

        surname = require_non_empty(surname, "Surname")
        given_name = require_non_empty(given_name, "Given name")
        address = require_non_empty(address, "Address")
        parent_contact = require_non_empty(parent_contact, "Parent contact")
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", PASSWORD_MIN_LENGTH)
        birthdate = parse_iso_date(require_non_empty(birthday, "Birthday"))
        date_joined = parse_iso_date(require_non_empty(date_of_investiture, "Date of investiture"))

        if date_joined > self._clock():
            raise ValidationError("Date of investiture cannot be in the future")

        email = require_email(email) if email else f"{username.lower()}@{self._email_domain}"
        if self._members.get_by_email(email):
            raise ConflictError("Email already exists")

        member_id = self._members.create(
            NewMember(
                surname=surname,
                given_name=given_name,
                email=email,
                password_hash=generate_password_hash(password),
                birthdate=birthdate,
                address=address,
                parent_contact=parent_contact,
                date_joined=date_joined,
                contact_number=(contact_number or "").strip() or None,
                created_by=admin.user_id,
            )
        )
        logger.info(f"Member {member_id} ({given_name} {surname}) created by admin {admin.user_id}")
        return self._view(self._require(member_id))

    def update_member(self, caller: Identity, member_id: int, data: dict) -> MemberView:
        require_admin(caller)
        current = self._require(member_id)

        email = data.get("email")
        if email:
            email = require_email(email)
            other = self._members.get_by_email(email)
            if other and other.member_id != current.member_id:
                raise ConflictError("Email already exists")

        status = data.get("memberStatus") or data.get("status")
        changes = MemberChanges(
            surname=(data.get("surname") or "").strip() or None,
            given_name=(data.get("givenName") or data.get("given_name") or "").strip() or None,
            email=email or None,
            contact_number=(data.get("contactNumber") or data.get("contact_number") or "").strip() or None,
            birthdate=parse_optional_date(data.get("birthdate")),
            address=(data.get("address") or "").strip() or None,
            status=require_enum(MemberStatus, status, "Status") if status else None,
        )

        self._members.update(current.member_id, changes)
        return self._view(self._require(current.member_id))

    def deactivate_member(self, caller: Identity, member_id: int) -> MemberView:
        admin = require_admin(caller)
        member = self._require(member_id)

        if member.is_active:
            self._members.set_status(member.member_id, MemberStatus.INACTIVE)
            logger.info(f"Member {member.member_id} deactivated by admin {admin.user_id}")
        return self._view(self._require(member.member_id))

    def get_profile(self, caller: Identity) -> MemberView:
        me = require_member(caller)
        return self._view(self._require(me.user_id))
