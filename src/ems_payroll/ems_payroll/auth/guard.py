"""Role, ownership and last-administrator decisions.

Every function here is a pure decision over its arguments: no repository
access, no hidden state. Services fetch what is needed and call in.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..core.enums import GuardedAction, Role
from ..core.exceptions import UnauthorizedAccessError
from ..users.model import User
from .model import Caller

logger = logging.getLogger(__name__)

LAST_ADMIN_MESSAGE = "cannot remove the last active administrator"


def require_authenticated(caller: Optional[Caller]) -> Caller:
    if caller is None:
        raise UnauthorizedAccessError("Authentication is required")
    return caller


def require_role(caller: Optional[Caller], role: Role) -> None:
    caller = require_authenticated(caller)
    if caller.role != role:
        raise UnauthorizedAccessError(f"{role.value} role is required for this action")


def require_owner_or_admin(caller: Optional[Caller], resource_owner_id: int) -> None:
    caller = require_authenticated(caller)
    if caller.role == Role.ADMIN:
        return
    if int(caller.user_id) != int(resource_owner_id):
        raise UnauthorizedAccessError("You can only access your own records")


def count_enabled_admins(users: Iterable[User]) -> int:
    return sum(1 for u in users if u.is_enabled_admin)


def guard_last_admin(action: GuardedAction, target_user: User, all_users: Iterable[User]) -> None:
    """Reject ``action`` if it would leave the system with no enabled administrator."""

    if not target_user.is_enabled_admin:
        return

    remaining = count_enabled_admins(all_users)
    if remaining <= 1:
        logger.warning(
            "Rejected %s of user %s: last enabled administrator",
            action.value,
            target_user.username,
        )
        raise UnauthorizedAccessError(LAST_ADMIN_MESSAGE)
