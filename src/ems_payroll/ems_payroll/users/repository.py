from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        username: str,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        role: Role,
        department: Optional[str],
        position: Optional[str],
        hourly_rate: Optional[float],
    ) -> int:
        raise NotImplementedError

    def update_user(self, user: User) -> bool:
        """Persist every mutable field of ``user`` (matched by user_id)."""

        raise NotImplementedError

    def set_enabled(self, user_id: int, *, enabled: bool) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError
