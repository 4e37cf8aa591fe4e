from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AdminUser, NewAdmin


class AdminUserRepository(Protocol):
    """Repository interface for admin accounts."""

    def get_by_id(self, admin_id: int) -> Optional[AdminUser]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[AdminUser]:
        raise NotImplementedError

    def count_admins(self) -> int:
        raise NotImplementedError

    def list_active(self) -> Sequence[AdminUser]:
        raise NotImplementedError

    def create(self, new: NewAdmin) -> int:
        raise NotImplementedError


class SettingsRepository(Protocol):
    """Key/value application settings (e.g. the registration lock)."""

    def get_setting(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_setting(self, key: str, value: str) -> None:
        raise NotImplementedError
