from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = """
    user_id, username, email, password_hash, first_name, last_name, role,
    department, position, hourly_rate, enabled, created_at, updated_at
"""


def _row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        username=row["username"],
        email=row["email"],
        password_hash=row["password_hash"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        role=Role(row["role"]),
        department=row.get("department"),
        position=row.get("position"),
        hourly_rate=as_float(row.get("hourly_rate")),
        enabled=bool(row.get("enabled", True)),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("user_id", int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return self._get_one("username", username)

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email", email)

    def create_user(
        self,
        *,
        username: str,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        role: Role,
        department: Optional[str],
        position: Optional[str],
        hourly_rate: Optional[float],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(username, email, password_hash, first_name, last_name, role,
                                  department, position, hourly_rate, enabled)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,1)
                """,
                (username, email, password_hash, first_name, last_name, role.value, department, position, hourly_rate),
            )
            return int(cur.lastrowid)

    def update_user(self, user: User) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET email=%s, password_hash=%s, first_name=%s, last_name=%s, role=%s,
                    department=%s, position=%s, hourly_rate=%s, enabled=%s
                WHERE user_id=%s
                """,
                (
                    user.email,
                    user.password_hash,
                    user.first_name,
                    user.last_name,
                    user.role.value,
                    user.department,
                    user.position,
                    user.hourly_rate,
                    1 if user.enabled else 0,
                    user.user_id,
                ),
            )
            return cur.rowcount > 0

    def set_enabled(self, user_id: int, *, enabled: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET enabled=%s WHERE user_id=%s", (1 if enabled else 0, int(user_id)))
            return cur.rowcount > 0

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY user_id")
            return [_row_to_user(r) for r in fetchall(cur)]
