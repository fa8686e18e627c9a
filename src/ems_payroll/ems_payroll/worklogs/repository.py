from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import WorkLogStatus
from .model import WorkLogEntry


class WorkLogRepository(Protocol):
    def get_by_id(self, worklog_id: int) -> Optional[WorkLogEntry]:
        raise NotImplementedError

    def exists_for_user_and_date(self, *, user_id: int, work_date: date) -> bool:
        raise NotImplementedError

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
        raise NotImplementedError

    def update_content(
        self,
        *,
        worklog_id: int,
        hours_worked: float,
        remarks: Optional[str],
        updated_at: datetime,
    ) -> bool:
        raise NotImplementedError

    def update_status(self, *, worklog_id: int, status: WorkLogStatus, updated_at: datetime) -> bool:
        raise NotImplementedError

    def delete_by_id(self, worklog_id: int) -> bool:
        raise NotImplementedError

    def list_for_user(self, *, user_id: int, limit: int, offset: int = 0) -> Sequence[WorkLogEntry]:
        """Newest first."""

        raise NotImplementedError

    def list_for_user_between(self, *, user_id: int, start: date, end: date) -> Sequence[WorkLogEntry]:
        """Both bounds inclusive, newest first."""

        raise NotImplementedError

    def list_all(
        self,
        *,
        status: Optional[WorkLogStatus] = None,
        limit: int = 200,
        offset: int = 0,
    ) -> Sequence[WorkLogEntry]:
        raise NotImplementedError
