"""Bearer-token request interceptor.

decode token -> resolve Caller -> hand it to the view as ``caller=...``.
Token failures never escape from here: they degrade to "no identity" and the
request is answered with a uniform 401.
"""
from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import request

from ..common.errors import error_response
from ..core.constants import BEARER_PREFIX
from ..core.exceptions import TokenError
from ..users.repository import UserRepository
from .model import Caller
from .token_service import TokenService

logger = logging.getLogger(__name__)


def extract_bearer_token(header_value: Optional[str]) -> Optional[str]:
    if not header_value or not header_value.startswith(BEARER_PREFIX):
        return None
    token = header_value[len(BEARER_PREFIX):].strip()
    return token or None


def resolve_caller(
    header_value: Optional[str],
    *,
    tokens: TokenService,
    users: UserRepository,
) -> Optional[Caller]:
    token = extract_bearer_token(header_value)
    if token is None:
        return None

    try:
        claims = tokens.verify(token)
    except TokenError as exc:
        logger.info("Token rejected: %s", type(exc).__name__)
        return None

    user = users.get_by_username(claims.subject)
    if user is None or not user.enabled:
        logger.info("Token subject is unknown or disabled")
        return None

    # Role comes from the stored user so demotions take effect before token expiry.
    return Caller(user_id=user.user_id, username=user.username, role=user.role)


def token_required(*, tokens: TokenService, users: UserRepository):
    """View decorator: inject ``caller`` or answer 401."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            caller = resolve_caller(request.headers.get("Authorization"), tokens=tokens, users=users)
            if caller is None:
                return error_response(401, "Unauthorized", "Full authentication is required to access this resource")
            return view(*args, caller=caller, **kwargs)

        return wrapper

    return decorator
