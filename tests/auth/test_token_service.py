from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from src.ems_payroll.ems_payroll.auth.token_service import TokenService
from src.ems_payroll.ems_payroll.core.enums import Role
from src.ems_payroll.ems_payroll.core.exceptions import (
    TokenExpiredError,
    TokenInvalidError,
    TokenMalformedError,
)

SECRET = "unit-test-jwt-secret-0123456789abcdef0123"


def test_issue_then_verify_carries_identity_claims(token_service, alice):
    token = token_service.issue(alice)
    claims = token_service.verify(token)

    assert claims.subject == "alice"
    assert claims.role == Role.EMPLOYEE
    assert claims.user_id == alice.user_id
    assert claims.expires_at - claims.issued_at == timedelta(seconds=3600)


def test_extra_claims_are_kept_but_cannot_override_identity(token_service, alice):
    token = token_service.issue(alice, {"department": "Engineering", "sub": "mallory", "role": "ADMIN"})
    claims = token_service.verify(token)

    assert claims.subject == "alice"
    assert claims.role == Role.EMPLOYEE
    assert claims.extra["department"] == "Engineering"


def test_tokens_are_distinct_per_issue(token_service, alice):
    assert token_service.issue(alice) != token_service.issue(alice)


def test_subject_matches_only_its_own_user(token_service, alice, bob):
    token = token_service.issue(alice)

    assert token_service.subject_matches(token, alice) is True
    assert token_service.subject_matches(token, bob) is False


def test_expired_token_is_rejected(alice):
    issued = datetime.now(timezone.utc) - timedelta(hours=2)
    tokens = TokenService(SECRET, ttl_seconds=60, clock=lambda: issued)
    token = tokens.issue(alice)

    with pytest.raises(TokenExpiredError):
        tokens.verify(token)
    assert tokens.subject_matches(token, alice) is False


def test_token_signed_with_other_secret_is_invalid(token_service, alice):
    other = TokenService("another-secret-0123456789abcdef0123456789", ttl_seconds=3600)
    token = other.issue(alice)

    with pytest.raises(TokenInvalidError):
        token_service.verify(token)


def test_token_missing_subject_is_invalid(token_service):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"iat": int(now.timestamp()), "exp": int((now + timedelta(minutes=5)).timestamp())},
        SECRET,
        algorithm="HS256",
    )

    with pytest.raises(TokenInvalidError):
        token_service.verify(token)


@pytest.mark.parametrize("token", ["", "   ", "not-a-jwt", "a.b.c"])
def test_garbage_is_malformed(token_service, token):
    with pytest.raises(TokenMalformedError):
        token_service.verify(token)


def test_constructor_rejects_bad_settings():
    with pytest.raises(ValueError):
        TokenService("", ttl_seconds=60)
    with pytest.raises(ValueError):
        TokenService(SECRET, ttl_seconds=0)
