from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .enums import Role
from .exceptions import AuthenticationError, AuthorizationError


@dataclass(frozen=True)
class AdminIdentity:
    """An authenticated admin account."""

    user_id: int
    name: str
    email: str

    @property
    def role(self) -> Role:
        return Role.ADMIN


@dataclass(frozen=True)
class MemberIdentity:
    """An authenticated ministry member."""

    user_id: int
    name: str
    email: str

    @property
    def role(self) -> Role:
        return Role.MEMBER


Identity = Union[AdminIdentity, MemberIdentity]


def identity_from_claims(claims: dict) -> Optional[Identity]:
    """Rebuild an identity from the values stored in the signed session."""

    user_id = claims.get("user_id")
    role = claims.get("role")
    if user_id is None or role is None:
        return None

    try:
        role = Role(role)
    except ValueError:
        return None

    cls = AdminIdentity if role == Role.ADMIN else MemberIdentity
    return cls(user_id=int(user_id), name=str(claims.get("name") or ""), email=str(claims.get("email") or ""))


def identity_to_claims(identity: Identity) -> dict:
    return {
        "user_id": identity.user_id,
        "role": identity.role.value,
        "name": identity.name,
        "email": identity.email,
    }


def require_authenticated(caller: Optional[Identity]) -> Identity:
    if caller is None:
        raise AuthenticationError("Unauthorized")
    return caller


def require_admin(caller: Optional[Identity]) -> AdminIdentity:
    caller = require_authenticated(caller)
    if not isinstance(caller, AdminIdentity):
        raise AuthorizationError("Admin access required")
    return caller


def require_member(caller: Optional[Identity]) -> MemberIdentity:
    caller = require_authenticated(caller)
    if not isinstance(caller, MemberIdentity):
        raise AuthorizationError("Member access required")
    return caller
