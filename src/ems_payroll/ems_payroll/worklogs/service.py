"""Work-log lifecycle.

PENDING (created by the owner) -> APPROVED | REJECTED (set by an ADMIN).
Decided entries never move again: re-applying the same decision is a no-op,
switching to the other decision is refused. Owners may edit or delete their
entries only while they are PENDING.

The persistence layer is expected to serialize writes to one entry; this
service holds no locks.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..auth.guard import require_authenticated, require_owner_or_admin, require_role
from ..auth.model import Caller
from ..common.datetime_utils import YearMonth, now_utc
from ..common.validators import require_hours
from ..core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ..core.enums import Role, WorkLogStatus
from ..core.exceptions import (
    DuplicateResourceError,
    ResourceNotFoundError,
    UnauthorizedAccessError,
    ValidationError,
)
from .model import MonthlyWorkSummary, WorkLogEntry
from .repository import WorkLogRepository

logger = logging.getLogger(__name__)


def _page_bounds(page: int, size: int) -> tuple[int, int]:
    page = int(page)
    size = int(size)
    if page < 0:
        raise ValidationError("page must be >= 0")
    if size < 1 or size > MAX_PAGE_SIZE:
        raise ValidationError(f"size must be between 1 and {MAX_PAGE_SIZE}")
    return size, page * size


def _clean_remarks(remarks: Optional[str]) -> Optional[str]:
    return (remarks or "").strip() or None


class WorkLogService:
    def __init__(self, worklogs: WorkLogRepository, *, clock: Optional[Callable[[], datetime]] = None):
        self._worklogs = worklogs
        self._clock = clock or now_utc

    def _get_or_raise(self, worklog_id: int) -> WorkLogEntry:
        entry = self._worklogs.get_by_id(int(worklog_id))
        if not entry:
            raise ResourceNotFoundError(f"Work log not found with id: {worklog_id}")
        return entry

    def create(
        self,
        *,
        caller: Caller,
        work_date: Optional[date],
        hours_worked,
        remarks: Optional[str] = None,
    ) -> WorkLogEntry:
        caller = require_authenticated(caller)
        if work_date is None:
            raise ValidationError("Date is required")
        hours = require_hours(hours_worked)

        if self._worklogs.exists_for_user_and_date(user_id=caller.user_id, work_date=work_date):
            raise DuplicateResourceError(f"Work log already exists for date: {work_date.isoformat()}")

        worklog_id = self._worklogs.create(
            user_id=caller.user_id,
            work_date=work_date,
            hours_worked=hours,
            remarks=_clean_remarks(remarks),
            status=WorkLogStatus.PENDING,
            created_at=self._clock(),
        )
        logger.info("Work log %s created by %s for %s", worklog_id, caller.username, work_date)
        return self._get_or_raise(worklog_id)

    def get(self, *, caller: Caller, worklog_id: int) -> WorkLogEntry:
        entry = self._get_or_raise(worklog_id)
        require_owner_or_admin(caller, entry.user_id)
        return entry

    def update_content(
        self,
        *,
        caller: Caller,
        worklog_id: int,
        hours_worked,
        remarks: Optional[str] = None,
    ) -> WorkLogEntry:
        caller = require_authenticated(caller)
        entry = self._get_or_raise(worklog_id)

        if entry.user_id != caller.user_id:
            raise UnauthorizedAccessError("You can only edit your own work logs")
        if entry.status != WorkLogStatus.PENDING:
            raise UnauthorizedAccessError(f"Work log is {entry.status.value} and can no longer be edited")

        hours = require_hours(hours_worked)
        updated = self._worklogs.update_content(
            worklog_id=entry.worklog_id,
            hours_worked=hours,
            remarks=_clean_remarks(remarks),
            updated_at=self._clock(),
        )
        if not updated:
            # Lost a race with a status decision.
            raise UnauthorizedAccessError("Work log can no longer be edited")
        return self._get_or_raise(entry.worklog_id)

    def transition_status(self, *, caller: Caller, worklog_id: int, new_status: WorkLogStatus) -> WorkLogEntry:
        require_role(caller, Role.ADMIN)

        if new_status == WorkLogStatus.PENDING:
            raise ValidationError("Status can only be set to APPROVED or REJECTED")

        entry = self._get_or_raise(worklog_id)
        if entry.status == new_status:
            return entry
        if entry.status.is_terminal:
            raise ValidationError(f"Work log was already {entry.status.value}")

        if not self._worklogs.update_status(worklog_id=entry.worklog_id, status=new_status, updated_at=self._clock()):
            raise ResourceNotFoundError(f"Work log not found with id: {worklog_id}")
        logger.info("Work log %s %s by %s", entry.worklog_id, new_status.value, caller.username)
        return self._get_or_raise(entry.worklog_id)

    def delete(self, *, caller: Caller, worklog_id: int) -> None:
        caller = require_authenticated(caller)
        entry = self._get_or_raise(worklog_id)

        if not caller.is_admin:
            if entry.user_id != caller.user_id:
                raise UnauthorizedAccessError("You can only delete your own work logs")
            if entry.status != WorkLogStatus.PENDING:
                raise UnauthorizedAccessError(f"Work log is {entry.status.value} and can no longer be deleted")

        if not self._worklogs.delete_by_id(entry.worklog_id):
            raise ResourceNotFoundError(f"Work log not found with id: {worklog_id}")
        logger.info("Work log %s deleted by %s", entry.worklog_id, caller.username)

    def list_mine(self, *, caller: Caller, page: int = 0, size: int = DEFAULT_PAGE_SIZE) -> Sequence[WorkLogEntry]:
        caller = require_authenticated(caller)
        limit, offset = _page_bounds(page, size)
        return self._worklogs.list_for_user(user_id=caller.user_id, limit=limit, offset=offset)

    def list_all(
        self,
        *,
        caller: Caller,
        status: Optional[WorkLogStatus] = None,
        page: int = 0,
        size: int = DEFAULT_PAGE_SIZE,
    ) -> Sequence[WorkLogEntry]:
        require_role(caller, Role.ADMIN)
        limit, offset = _page_bounds(page, size)
        return self._worklogs.list_all(status=status, limit=limit, offset=offset)

    def list_between(
        self,
        *,
        caller: Caller,
        start: date,
        end: date,
        user_id: Optional[int] = None,
    ) -> Sequence[WorkLogEntry]:
        caller = require_authenticated(caller)
        if end < start:
            raise ValidationError("End date must not be before start date")
        owner_id = caller.user_id if user_id is None else int(user_id)
        require_owner_or_admin(caller, owner_id)
        return self._worklogs.list_for_user_between(user_id=owner_id, start=start, end=end)

    def monthly_summary(
        self,
        *,
        caller: Caller,
        year_month: YearMonth,
        user_id: Optional[int] = None,
    ) -> MonthlyWorkSummary:
        caller = require_authenticated(caller)
        owner_id = caller.user_id if user_id is None else int(user_id)
        require_owner_or_admin(caller, owner_id)
        entries = self._worklogs.list_for_user_between(
            user_id=owner_id,
            start=year_month.first_day,
            end=year_month.last_day,
        )
        return MonthlyWorkSummary.from_entries(year_month, entries)
