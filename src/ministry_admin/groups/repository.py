from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import MinistryGroup, NewGroup


class GroupRepository(Protocol):
    def get_by_id(self, group_id: int) -> Optional[MinistryGroup]:
        raise NotImplementedError

    def list_groups(self) -> Sequence[MinistryGroup]:
        """Ordered by name."""

        raise NotImplementedError

    def create(self, new: NewGroup) -> int:
        raise NotImplementedError

    def delete(self, group_id: int) -> bool:
        raise NotImplementedError

    def add_member(self, group_id: int, member_id: int) -> bool:
        """Returns False when the member was already in the group."""

        raise NotImplementedError

    def remove_member(self, group_id: int, member_id: int) -> bool:
        raise NotImplementedError
