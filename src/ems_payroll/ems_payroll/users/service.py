from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from werkzeug.security import generate_password_hash

from ..auth.guard import guard_last_admin, require_owner_or_admin, require_role
from ..auth.model import Caller
from ..common.validators import require_email, require_min_length, require_non_empty, require_non_negative
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import GuardedAction, Role
from ..core.exceptions import DuplicateResourceError, ResourceNotFoundError, UnauthorizedAccessError
from .model import User, UserChanges
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Use case: manage users, keeping at least one enabled administrator."""

    def __init__(self, users: UserRepository):
        self._users = users

    def _get_or_raise(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise ResourceNotFoundError(f"User not found with id: {user_id}")
        return user

    def list_users(self, *, caller: Caller) -> Sequence[User]:
        require_role(caller, Role.ADMIN)
        return self._users.list_all()

    def get_user(self, *, caller: Caller, user_id: int) -> User:
        require_owner_or_admin(caller, user_id)
        return self._get_or_raise(user_id)

    def update_user(self, *, caller: Caller, user_id: int, changes: UserChanges) -> User:
        require_owner_or_admin(caller, user_id)
        user = self._get_or_raise(user_id)

        admin_only = (changes.role, changes.hourly_rate, changes.department, changes.position)
        if not caller.is_admin and any(v is not None for v in admin_only):
            raise UnauthorizedAccessError("Only an administrator can change role, rate, department or position")

        updated = user
        if changes.email is not None:
            email = require_email(changes.email)
            other = self._users.get_by_email(email)
            if other and other.user_id != user.user_id:
                raise DuplicateResourceError("Email is already registered")
            updated = replace(updated, email=email)
        if changes.first_name is not None:
            updated = replace(updated, first_name=require_non_empty(changes.first_name, "First name"))
        if changes.last_name is not None:
            updated = replace(updated, last_name=require_non_empty(changes.last_name, "Last name"))
        if changes.department is not None:
            updated = replace(updated, department=changes.department.strip() or None)
        if changes.position is not None:
            updated = replace(updated, position=changes.position.strip() or None)
        if changes.hourly_rate is not None:
            updated = replace(updated, hourly_rate=require_non_negative(changes.hourly_rate, "Hourly rate"))
        if changes.password is not None:
            require_min_length(changes.password, "Password", MIN_PASSWORD_LENGTH)
            updated = replace(updated, password_hash=generate_password_hash(changes.password))
        if changes.role is not None and changes.role != user.role:
            if user.role == Role.ADMIN:
                guard_last_admin(GuardedAction.DEMOTE, user, self._users.list_all())
            updated = replace(updated, role=changes.role)

        if not self._users.update_user(updated):
            raise ResourceNotFoundError(f"User not found with id: {user_id}")
        logger.info("User %s updated by %s", user.username, caller.username)
        return self._get_or_raise(user_id)

    def update_status(self, *, caller: Caller, user_id: int, enabled: bool) -> User:
        require_role(caller, Role.ADMIN)
        user = self._get_or_raise(user_id)

        if not enabled:
            guard_last_admin(GuardedAction.DISABLE, user, self._users.list_all())

        if not self._users.set_enabled(user.user_id, enabled=bool(enabled)):
            raise ResourceNotFoundError(f"User not found with id: {user_id}")
        logger.info("User %s %s by %s", user.username, "enabled" if enabled else "disabled", caller.username)
        return self._get_or_raise(user_id)

    def delete_user(self, *, caller: Caller, user_id: int) -> None:
        require_role(caller, Role.ADMIN)
        user = self._get_or_raise(user_id)

        guard_last_admin(GuardedAction.DELETE, user, self._users.list_all())

        if not self._users.delete_by_id(user.user_id):
            raise ResourceNotFoundError(f"User not found with id: {user_id}")
        logger.info("User %s deleted by %s", user.username, caller.username)
