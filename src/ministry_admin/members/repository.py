from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import MemberStatus
from .model import Member, MemberChanges, NewMember


class MemberRepository(Protocol):
    """Repository interface for members.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, member_id: int) -> Optional[Member]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Member]:
        raise NotImplementedError

    def list_members(self, *, status: Optional[MemberStatus] = None) -> Sequence[Member]:
        """Members ordered by surname."""

        raise NotImplementedError

    def create(self, new: NewMember) -> int:
        raise NotImplementedError

    def update(self, member_id: int, changes: MemberChanges) -> bool:
        raise NotImplementedError

    def set_status(self, member_id: int, status: MemberStatus) -> bool:
        raise NotImplementedError
