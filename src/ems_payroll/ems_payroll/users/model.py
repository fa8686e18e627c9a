from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object (no DB access code here).
    """

    user_id: int
    username: str
    email: str
    password_hash: str
    first_name: str
    last_name: str
    role: Role
    department: Optional[str] = None
    position: Optional[str] = None
    hourly_rate: Optional[float] = None
    enabled: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_enabled_admin(self) -> bool:
        return self.enabled and self.role == Role.ADMIN


@dataclass(frozen=True)
class UserChanges:
    """Profile fields a caller asked to change; None means keep."""

    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    hourly_rate: Optional[float] = None
    role: Optional[Role] = None
    password: Optional[str] = None
