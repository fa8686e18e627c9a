from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.ems_payroll.ems_payroll.auth.model import Caller
from src.ems_payroll.ems_payroll.auth.token_service import TokenService
from src.ems_payroll.ems_payroll.core.enums import Role, WorkLogStatus
from src.ems_payroll.ems_payroll.users.model import User
from src.ems_payroll.ems_payroll.worklogs.model import WorkLogEntry

TEST_JWT_SECRET = "unit-test-jwt-secret-0123456789abcdef0123"


class InMemoryUsers:
    def __init__(self, users=None):
        self._users: dict[int, User] = {}
        self._next_id = 1
        for u in users or []:
            self.add(u)

    def add(self, user: User) -> User:
        self._users[user.user_id] = user
        self._next_id = max(self._next_id, user.user_id + 1)
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.username == username), None)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.email == email), None)

    def create_user(self, *, username, email, password_hash, first_name, last_name, role, department, position, hourly_rate):
        uid = self._next_id
        self.add(
            User(
                user_id=uid,
                username=username,
                email=email,
                password_hash=password_hash,
                first_name=first_name,
                last_name=last_name,
                role=role,
                department=department,
                position=position,
                hourly_rate=hourly_rate,
            )
        )
        return uid

    def update_user(self, user: User) -> bool:
        if user.user_id not in self._users:
            return False
        self._users[user.user_id] = user
        return True

    def set_enabled(self, user_id: int, *, enabled: bool) -> bool:
        user = self._users.get(int(user_id))
        if not user:
            return False
        self._users[user.user_id] = replace(user, enabled=enabled)
        return True

    def delete_by_id(self, user_id: int) -> bool:
        return self._users.pop(int(user_id), None) is not None

    def list_all(self):
        return list(self._users.values())


class InMemoryWorkLogs:
    def __init__(self):
        self._logs: dict[int, WorkLogEntry] = {}
        self._next_id = 1

    def add(self, *, user_id, work_date, hours_worked, status=WorkLogStatus.PENDING, remarks=None) -> WorkLogEntry:
        wid = self.create(
            user_id=user_id,
            work_date=work_date,
            hours_worked=hours_worked,
            remarks=remarks,
            status=status,
            created_at=datetime(2026, 2, 1, 10, 0, 0),
        )
        return self._logs[wid]

    def get_by_id(self, worklog_id):
        return self._logs.get(int(worklog_id))

    def exists_for_user_and_date(self, *, user_id, work_date):
        return any(e.user_id == user_id and e.work_date == work_date for e in self._logs.values())

    def create(self, *, user_id, work_date, hours_worked, remarks, status, created_at):
        wid = self._next_id
        self._next_id += 1
        self._logs[wid] = WorkLogEntry(
            worklog_id=wid,
            user_id=int(user_id),
            work_date=work_date,
            hours_worked=float(hours_worked),
            status=status,
            created_at=created_at,
            updated_at=created_at,
            remarks=remarks,
        )
        return wid

    def update_content(self, *, worklog_id, hours_worked, remarks, updated_at):
        entry = self._logs.get(int(worklog_id))
        if not entry or entry.status != WorkLogStatus.PENDING:
            return False
        self._logs[entry.worklog_id] = replace(entry, hours_worked=hours_worked, remarks=remarks, updated_at=updated_at)
        return True

    def update_status(self, *, worklog_id, status, updated_at):
        entry = self._logs.get(int(worklog_id))
        if not entry:
            return False
        self._logs[entry.worklog_id] = replace(entry, status=status, updated_at=updated_at)
        return True

    def delete_by_id(self, worklog_id):
        return self._logs.pop(int(worklog_id), None) is not None

    def list_for_user(self, *, user_id, limit, offset=0):
        items = sorted((e for e in self._logs.values() if e.user_id == user_id), key=lambda e: e.work_date, reverse=True)
        return items[offset:offset + limit]

    def list_for_user_between(self, *, user_id, start, end):
        items = [e for e in self._logs.values() if e.user_id == user_id and start <= e.work_date <= end]
        return sorted(items, key=lambda e: e.work_date, reverse=True)

    def list_all(self, *, status=None, limit=200, offset=0):
        items = [e for e in self._logs.values() if status is None or e.status == status]
        items.sort(key=lambda e: (e.work_date, e.worklog_id), reverse=True)
        return items[offset:offset + limit]


def make_user(
    user_id: int,
    username: str,
    *,
    role: Role = Role.EMPLOYEE,
    hourly_rate: Optional[float] = 25.0,
    department: Optional[str] = "Engineering",
    enabled: bool = True,
    password: str = "secret123",
) -> User:
    return User(
        user_id=user_id,
        username=username,
        email=f"{username}@example.com",
        password_hash=generate_password_hash(password),
        first_name=username.capitalize(),
        last_name="Tester",
        role=role,
        department=department,
        hourly_rate=hourly_rate,
        enabled=enabled,
    )


def caller_for(user: User) -> Caller:
    return Caller(user_id=user.user_id, username=user.username, role=user.role)


@pytest.fixture
def fixed_now():
    return datetime(2026, 2, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def work_day():
    return date(2026, 2, 2)


@pytest.fixture
def admin():
    return make_user(1, "admin", role=Role.ADMIN, hourly_rate=None, department=None)


@pytest.fixture
def alice():
    return make_user(2, "alice", hourly_rate=25.0, department="Engineering")


@pytest.fixture
def bob():
    return make_user(3, "bob", hourly_rate=20.0, department="Sales")


@pytest.fixture
def users(admin, alice, bob):
    return InMemoryUsers([admin, alice, bob])


@pytest.fixture
def worklogs():
    return InMemoryWorkLogs()


@pytest.fixture
def token_service():
    return TokenService(TEST_JWT_SECRET, ttl_seconds=3600)


@pytest.fixture
def user_factory():
    return make_user


@pytest.fixture
def as_caller():
    return caller_for
