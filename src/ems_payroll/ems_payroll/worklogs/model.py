from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from ..common.datetime_utils import YearMonth
from ..core.constants import REGULAR_HOURS_PER_DAY
from ..core.enums import WorkLogStatus


@dataclass(frozen=True)
class WorkLogEntry:
    """Domain entity: one day of work reported by its owner."""

    worklog_id: int
    user_id: int
    work_date: date
    hours_worked: float
    status: WorkLogStatus
    created_at: datetime
    updated_at: datetime
    remarks: Optional[str] = None

    @property
    def regular_hours(self) -> float:
        return min(self.hours_worked, REGULAR_HOURS_PER_DAY)

    @property
    def overtime_hours(self) -> float:
        return max(self.hours_worked - REGULAR_HOURS_PER_DAY, 0.0)


@dataclass(frozen=True)
class MonthlyWorkSummary:
    """Read-model: hours for one month, split by approval status."""

    year_month: YearMonth
    total_hours: float = 0.0
    approved_hours: float = 0.0
    pending_hours: float = 0.0
    rejected_hours: float = 0.0
    overtime_hours: float = 0.0
    work_days_count: int = 0
    total_work_logs: int = 0
    approved_work_logs: int = 0
    pending_work_logs: int = 0
    rejected_work_logs: int = 0

    @property
    def average_hours_per_day(self) -> float:
        if not self.work_days_count:
            return 0.0
        return round(self.total_hours / self.work_days_count, 2)

    @classmethod
    def from_entries(cls, year_month: YearMonth, entries: Optional[Iterable[WorkLogEntry]]) -> "MonthlyWorkSummary":
        items = [e for e in (entries or []) if year_month.contains(e.work_date)]

        def hours(status: WorkLogStatus) -> float:
            return sum(e.hours_worked for e in items if e.status == status)

        def count(status: WorkLogStatus) -> int:
            return sum(1 for e in items if e.status == status)

        return cls(
            year_month=year_month,
            total_hours=sum(e.hours_worked for e in items),
            approved_hours=hours(WorkLogStatus.APPROVED),
            pending_hours=hours(WorkLogStatus.PENDING),
            rejected_hours=hours(WorkLogStatus.REJECTED),
            overtime_hours=sum(e.overtime_hours for e in items),
            work_days_count=len({e.work_date for e in items}),
            total_work_logs=len(items),
            approved_work_logs=count(WorkLogStatus.APPROVED),
            pending_work_logs=count(WorkLogStatus.PENDING),
            rejected_work_logs=count(WorkLogStatus.REJECTED),
        )
