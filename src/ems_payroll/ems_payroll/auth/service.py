from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import (
    parse_role,
    require_email,
    require_min_length,
    require_non_empty,
    require_non_negative,
)
from ..core.constants import MIN_PASSWORD_LENGTH, MIN_USERNAME_LENGTH
from ..core.exceptions import AuthenticationError, DuplicateResourceError, ResourceNotFoundError
from ..users.model import User
from ..users.repository import UserRepository
from .model import AuthResponse, Caller
from .token_service import TokenService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


class AuthService:
    """Use case: registration and login (authentication gateway)."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def register(
        self,
        *,
        username: str,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: Optional[str] = None,
        department: Optional[str] = None,
        position: Optional[str] = None,
        hourly_rate=None,
    ) -> AuthResponse:
        username = require_non_empty(username, "Username")
        require_min_length(username, "Username", MIN_USERNAME_LENGTH)
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        first_name = require_non_empty(first_name, "First name")
        last_name = require_non_empty(last_name, "Last name")
        parsed_role = parse_role(role)
        rate = require_non_negative(hourly_rate, "Hourly rate") if hourly_rate is not None else None

        if self._users.get_by_username(username):
            raise DuplicateResourceError("Username is already taken")
        if self._users.get_by_email(email):
            raise DuplicateResourceError("Email is already registered")

        user_id = self._users.create_user(
            username=username,
            email=email,
            password_hash=generate_password_hash(password),
            first_name=first_name,
            last_name=last_name,
            role=parsed_role,
            department=(department or "").strip() or None,
            position=(position or "").strip() or None,
            hourly_rate=rate,
        )
        user = self._users.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundError("Registered user could not be loaded")

        logger.info("Registered user %s (role=%s)", user.username, user.role.value)
        return self._respond(user, "User registered successfully")

    def login(self, username: str, password: str) -> AuthResponse:
        user = self._users.get_by_username((username or "").strip())
        if not user or not user.enabled:
            logger.warning("Login failed for %s", username)
            raise AuthenticationError(INVALID_CREDENTIALS)

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.warning("Login failed for %s", username)
            raise AuthenticationError(INVALID_CREDENTIALS)

        return self._respond(user, "Login successful")

    def current_user(self, caller: Caller) -> User:
        user = self._users.get_by_id(caller.user_id)
        if user is None:
            raise ResourceNotFoundError(f"User not found with id: {caller.user_id}")
        return user

    def _respond(self, user: User, message: str) -> AuthResponse:
        return AuthResponse(
            token=self._tokens.issue(user),
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
            message=message,
        )
