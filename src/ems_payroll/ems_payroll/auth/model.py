from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Caller:
    """Authenticated identity of the current request.

    Built by the request interceptor and passed explicitly to every service call.
    """

    user_id: int
    username: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


@dataclass(frozen=True)
class Claims:
    """Decoded token payload."""

    subject: str
    role: Optional[Role]
    user_id: Optional[int]
    issued_at: datetime
    expires_at: datetime
    extra: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AuthResponse:
    token: str
    username: str
    email: str
    first_name: str
    last_name: str
    role: Role
    message: str
