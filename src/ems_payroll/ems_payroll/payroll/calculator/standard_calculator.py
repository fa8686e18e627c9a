from __future__ import annotations

import math
from typing import Optional, Sequence

from ...core.constants import OVERTIME_MULTIPLIER, REGULAR_HOURS_PER_DAY
from ...core.exceptions import PayrollProcessingError
from ...worklogs.model import WorkLogEntry
from ..model import Earnings, to_cents
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: first 8h of a day at the base rate, the rest at 1.5x."""

    def __init__(
        self,
        *,
        regular_hours_per_day: float = REGULAR_HOURS_PER_DAY,
        overtime_multiplier: float = OVERTIME_MULTIPLIER,
    ):
        self._cap = float(regular_hours_per_day)
        self._multiplier = float(overtime_multiplier)

    def split_hours(self, entry: WorkLogEntry) -> tuple[float, float]:
        hours = float(entry.hours_worked or 0.0)
        if not math.isfinite(hours) or hours < 0:
            raise PayrollProcessingError(f"Work log {entry.worklog_id} has invalid hours")
        regular = min(hours, self._cap)
        return regular, max(hours - self._cap, 0.0)

    def earnings(self, entries: Sequence[WorkLogEntry], *, hourly_rate: Optional[float]) -> Earnings:
        if hourly_rate is None:
            raise PayrollProcessingError("Hourly rate is not set")
        rate = float(hourly_rate)
        if not math.isfinite(rate) or rate < 0:
            raise PayrollProcessingError("Hourly rate must be a finite, non-negative number")

        regular_hours = 0.0
        overtime_hours = 0.0
        for e in entries:
            regular, overtime = self.split_hours(e)
            regular_hours += regular
            overtime_hours += overtime

        regular_pay = regular_hours * rate
        overtime_pay = overtime_hours * rate * self._multiplier
        return Earnings(
            regular_pay=to_cents(regular_pay),
            overtime_pay=to_cents(overtime_pay),
            gross_pay=to_cents(regular_pay + overtime_pay),
        )
