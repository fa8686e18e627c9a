"""Stateless signed tokens (JWT) carrying identity and role claims.

Validity is a pure function of the signing secret and the token itself:
nothing is persisted, every request re-derives it.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Mapping, Optional

import jwt

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_TOKEN_TTL_SECONDS, JWT_ALGORITHM
from ..core.enums import Role
from ..core.exceptions import TokenError, TokenExpiredError, TokenInvalidError, TokenMalformedError
from ..users.model import User
from .model import Claims

logger = logging.getLogger(__name__)

CLAIM_SUB = "sub"
CLAIM_ROLE = "role"
CLAIM_USER_ID = "userId"
CLAIM_IAT = "iat"
CLAIM_EXP = "exp"
CLAIM_JTI = "jti"

_RESERVED = {CLAIM_SUB, CLAIM_ROLE, CLAIM_USER_ID, CLAIM_IAT, CLAIM_EXP, CLAIM_JTI}


class TokenService:
    def __init__(
        self,
        secret: str,
        *,
        ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
        algorithm: str = JWT_ALGORITHM,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        if int(ttl_seconds) <= 0:
            raise ValueError("Token TTL must be positive")
        self._secret = secret
        self._ttl = timedelta(seconds=int(ttl_seconds))
        self._algorithm = algorithm
        self._clock = clock or now_utc

    @property
    def ttl_seconds(self) -> int:
        return int(self._ttl.total_seconds())

    def issue(self, user: User, extra_claims: Optional[Mapping[str, Any]] = None) -> str:
        now = self._clock()
        payload: dict[str, Any] = {k: v for k, v in (extra_claims or {}).items() if k not in _RESERVED}
        payload.update(
            {
                CLAIM_SUB: user.username,
                CLAIM_ROLE: user.role.value,
                CLAIM_USER_ID: user.user_id,
                CLAIM_IAT: int(now.timestamp()),
                CLAIM_EXP: int((now + self._ttl).timestamp()),
                # iat has one-second resolution; the nonce keeps tokens distinct.
                CLAIM_JTI: uuid.uuid4().hex,
            }
        )
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: Optional[str]) -> Claims:
        if not token or not token.strip():
            raise TokenMalformedError("Token is malformed")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": [CLAIM_SUB, CLAIM_EXP, CLAIM_IAT]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except jwt.InvalidSignatureError:
            raise TokenInvalidError("Token signature is invalid")
        except jwt.DecodeError:
            raise TokenMalformedError("Token is malformed")
        except jwt.InvalidTokenError:
            raise TokenInvalidError("Token is invalid")

        return _to_claims(payload)

    def subject_matches(self, token: Optional[str], user: User) -> bool:
        try:
            claims = self.verify(token)
        except TokenError as exc:
            logger.debug("Token rejected for %s: %s", user.username, type(exc).__name__)
            return False
        return claims.subject == user.username


def _to_claims(payload: Mapping[str, Any]) -> Claims:
    try:
        role: Optional[Role] = Role(payload.get(CLAIM_ROLE)) if payload.get(CLAIM_ROLE) else None
    except ValueError:
        role = None

    raw_user_id = payload.get(CLAIM_USER_ID)
    try:
        user_id = int(raw_user_id) if raw_user_id is not None else None
    except (TypeError, ValueError):
        raise TokenInvalidError("Token is invalid")

    return Claims(
        subject=str(payload[CLAIM_SUB]),
        role=role,
        user_id=user_id,
        issued_at=datetime.fromtimestamp(int(payload[CLAIM_IAT]), tz=timezone.utc),
        expires_at=datetime.fromtimestamp(int(payload[CLAIM_EXP]), tz=timezone.utc),
        extra={k: v for k, v in payload.items() if k not in _RESERVED},
    )
