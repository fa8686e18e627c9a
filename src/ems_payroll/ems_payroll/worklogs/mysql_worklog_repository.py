from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import WorkLogStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import WorkLogEntry
from .repository import WorkLogRepository

_COLUMNS = "worklog_id, user_id, work_date, hours_worked, remarks, status, created_at, updated_at"


def _row_to_entry(row: dict) -> WorkLogEntry:
    return WorkLogEntry(
        worklog_id=int(row["worklog_id"]),
        user_id=int(row["user_id"]),
        work_date=row["work_date"],
        hours_worked=as_float(row["hours_worked"]) or 0.0,
        remarks=row.get("remarks"),
        status=WorkLogStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class MySQLWorkLogRepository(WorkLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, worklog_id: int) -> Optional[WorkLogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_logs WHERE worklog_id=%s", (int(worklog_id),))
            row = fetchone(cur)
            return _row_to_entry(row) if row else None

    def exists_for_user_and_date(self, *, user_id: int, work_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM work_logs WHERE user_id=%s AND work_date=%s LIMIT 1",
                (int(user_id), work_date),
            )
            return fetchone(cur) is not None

    def create(
        self,
        *,
        user_id: int,
        work_date: date,
        hours_worked: float,
        remarks: Optional[str],
        status: WorkLogStatus,
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_logs(user_id, work_date, hours_worked, remarks, status, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), work_date, hours_worked, remarks, status.value, created_at, created_at),
            )
            return int(cur.lastrowid)

    def update_content(
        self,
        *,
        worklog_id: int,
        hours_worked: float,
        remarks: Optional[str],
        updated_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # Guarded on PENDING so a concurrent approval wins over a late edit.
            cur.execute(
                """
                UPDATE work_logs
                SET hours_worked=%s, remarks=%s, updated_at=%s
                WHERE worklog_id=%s AND status=%s
                """,
                (hours_worked, remarks, updated_at, int(worklog_id), WorkLogStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def update_status(self, *, worklog_id: int, status: WorkLogStatus, updated_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE work_logs SET status=%s, updated_at=%s WHERE worklog_id=%s",
                (status.value, updated_at, int(worklog_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, worklog_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_logs WHERE worklog_id=%s", (int(worklog_id),))
            return cur.rowcount > 0

    def list_for_user(self, *, user_id: int, limit: int, offset: int = 0) -> Sequence[WorkLogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM work_logs
                WHERE user_id=%s
                ORDER BY work_date DESC
                LIMIT %s OFFSET %s
                """,
                (int(user_id), int(limit), int(offset)),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def list_for_user_between(self, *, user_id: int, start: date, end: date) -> Sequence[WorkLogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM work_logs
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date DESC
                """,
                (int(user_id), start, end),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def list_all(
        self,
        *,
        status: Optional[WorkLogStatus] = None,
        limit: int = 200,
        offset: int = 0,
    ) -> Sequence[WorkLogEntry]:
        where = ""
        params: list = []
        if status is not None:
            where = "WHERE status=%s"
            params.append(status.value)
        params.extend([int(limit), int(offset)])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM work_logs
                {where}
                ORDER BY work_date DESC, worklog_id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]
