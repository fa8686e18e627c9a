from __future__ import annotations

from dataclasses import replace

from src.ems_payroll.ems_payroll.auth.interceptor import extract_bearer_token, resolve_caller
from src.ems_payroll.ems_payroll.core.enums import Role


def test_extract_bearer_token():
    assert extract_bearer_token("Bearer abc") == "abc"
    assert extract_bearer_token("Basic abc") is None
    assert extract_bearer_token("Bearer ") is None
    assert extract_bearer_token(None) is None


def test_valid_token_resolves_caller(users, token_service, alice):
    caller = resolve_caller(f"Bearer {token_service.issue(alice)}", tokens=token_service, users=users)

    assert caller.user_id == alice.user_id
    assert caller.username == "alice"
    assert caller.role == Role.EMPLOYEE


def test_bad_token_degrades_to_no_identity(users, token_service):
    assert resolve_caller("Bearer garbage", tokens=token_service, users=users) is None
    assert resolve_caller(None, tokens=token_service, users=users) is None


def test_disabled_or_deleted_user_has_no_identity(users, token_service, alice, bob):
    alice_token = token_service.issue(alice)
    bob_token = token_service.issue(bob)
    users.update_user(replace(alice, enabled=False))
    users.delete_by_id(bob.user_id)

    assert resolve_caller(f"Bearer {alice_token}", tokens=token_service, users=users) is None
    assert resolve_caller(f"Bearer {bob_token}", tokens=token_service, users=users) is None


def test_role_is_read_from_stored_user(users, token_service, admin):
    token = token_service.issue(admin)
    users.update_user(replace(admin, role=Role.EMPLOYEE))

    caller = resolve_caller(f"Bearer {token}", tokens=token_service, users=users)
    assert caller.role == Role.EMPLOYEE
