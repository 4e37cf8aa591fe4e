from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ServiceLevel


@dataclass(frozen=True)
class MinistryGroup:
    """A Sunday-service group and the ids of the members serving in it."""

    group_id: int
    name: str
    description: Optional[str] = None
    leader_member_id: Optional[int] = None
    meeting_time: Optional[str] = None
    location: Optional[str] = None
    member_ids: tuple[int, ...] = ()

    def has_member(self, member_id: int) -> bool:
        return member_id in self.member_ids


@dataclass(frozen=True)
class NewGroup:
    name: str
    description: Optional[str] = None
    leader_member_id: Optional[int] = None
    meeting_time: Optional[str] = None
    location: Optional[str] = None


@dataclass(frozen=True)
class MemberBrief:
    id: int
    surname: str
    given_name: str
    service_level: ServiceLevel


@dataclass(frozen=True)
class GroupView:
    """A group as a member sees it, with leader and roster resolved."""

    id: int
    name: str
    leader: Optional[MemberBrief]
    members: list[MemberBrief]
    is_my_group: bool
    meeting_time: Optional[str] = None
    location: Optional[str] = None
