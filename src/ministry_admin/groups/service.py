from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from loguru import logger

from ..common.datetime_utils import today_local
from ..common.validators import require_non_empty
from ..core.constants import UNASSIGNED_GROUP
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..core.identity import Identity, require_admin, require_member
from ..members.model import Member
from ..members.repository import MemberRepository
from .model import GroupView, MemberBrief, MinistryGroup, NewGroup
from .repository import GroupRepository


@dataclass(frozen=True)
class MemberGroups:
    my_group: Optional[GroupView]
    other_groups: list[GroupView]


class GroupService:
    """Use cases: Sunday-service groups (admin) and a member's view of them."""

    def __init__(
        self,
        groups: GroupRepository,
        members: MemberRepository,
        *,
        clock: Callable[[], date] = today_local,
    ):
        self._groups = groups
        self._members = members
        self._clock = clock

    def _require(self, group_id: int) -> MinistryGroup:
        group = self._groups.get_by_id(int(group_id))
        if not group:
            raise NotFoundError("Group not found")
        return group

    def _require_active_member(self, member_id) -> Member:
        try:
            member = self._members.get_by_id(int(member_id))
        except (TypeError, ValueError):
            raise ValidationError("Member is required")
        if not member:
            raise NotFoundError("Member not found")
        if not member.is_active:
            raise ValidationError("Only active members can be assigned to a group")
        return member

    def list_groups(self, caller: Identity) -> list[MinistryGroup]:
        require_admin(caller)
        return list(self._groups.list_groups())

    def create_group(
        self,
        caller: Identity,
        *,
        name: str,
        description: Optional[str] = None,
        leader_member_id: Optional[int] = None,
        meeting_time: Optional[str] = None,
        location: Optional[str] = None,
    ) -> MinistryGroup:
        admin = require_admin(caller)
        name = require_non_empty(name, "Group name")
        if any(g.name.lower() == name.lower() for g in self._groups.list_groups()):
            raise ConflictError("Group already exists")

        leader = self._require_active_member(leader_member_id) if leader_member_id is not None else None
        group_id = self._groups.create(
            NewGroup(
                name=name,
                description=(description or "").strip() or None,
                leader_member_id=leader.member_id if leader else None,
                meeting_time=(meeting_time or "").strip() or None,
                location=(location or "").strip() or None,
            )
        )
        if leader:
            self._groups.add_member(group_id, leader.member_id)

        logger.info(f"Group '{name}' created by admin {admin.user_id}")
        return self._require(group_id)

    def delete_group(self, caller: Identity, group_id: int) -> None:
        admin = require_admin(caller)
        group = self._require(group_id)
        self._groups.delete(group.group_id)
        logger.info(f"Group '{group.name}' deleted by admin {admin.user_id}")

    def add_member(self, caller: Identity, group_id: int, member_id: int) -> MinistryGroup:
        require_admin(caller)
        group = self._require(group_id)
        member = self._require_active_member(member_id)
        if not group.has_member(member.member_id):
            self._groups.add_member(group.group_id, member.member_id)
        return self._require(group.group_id)

    def remove_member(self, caller: Identity, group_id: int, member_id: int) -> MinistryGroup:
        require_admin(caller)
        group = self._require(group_id)
        if group.has_member(int(member_id)):
            self._groups.remove_member(group.group_id, int(member_id))
        return self._require(group.group_id)

    def _brief(self, member_id: Optional[int], today: date) -> Optional[MemberBrief]:
        if member_id is None:
            return None
        member = self._members.get_by_id(member_id)
        if not member:
            return None
        return MemberBrief(
            id=member.member_id,
            surname=member.surname,
            given_name=member.given_name,
            service_level=member.service_level(today),
        )

    def _view(self, group: MinistryGroup, *, mine: bool) -> GroupView:
        today = self._clock()
        roster = [b for b in (self._brief(mid, today) for mid in group.member_ids) if b is not None]
        return GroupView(
            id=group.group_id,
            name=group.name,
            leader=self._brief(group.leader_member_id, today),
            members=roster,
            is_my_group=mine,
            meeting_time=group.meeting_time,
            location=group.location,
        )

    def group_name_for(self, member_id: int) -> str:
        for g in self._groups.list_groups():
            if g.has_member(member_id):
                return g.name
        return UNASSIGNED_GROUP

    def my_group_name(self, caller: Identity) -> str:
        me = require_member(caller)
        return self.group_name_for(me.user_id)

    def member_groups(self, caller: Identity) -> MemberGroups:
        """The first group listing the caller is "my group"; the rest are others."""

        me = require_member(caller)
        mine: Optional[GroupView] = None
        others = []
        for g in self._groups.list_groups():
            if mine is None and g.has_member(me.user_id):
                mine = self._view(g, mine=True)
            else:
                others.append(self._view(g, mine=False))
        return MemberGroups(my_group=mine, other_groups=others)
