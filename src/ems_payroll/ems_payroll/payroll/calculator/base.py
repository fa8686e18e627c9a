from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ...worklogs.model import WorkLogEntry
from ..model import Earnings


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def split_hours(self, entry: WorkLogEntry) -> tuple[float, float]:
        """Return ``(regular_hours, overtime_hours)`` for one entry."""

        raise NotImplementedError

    @abstractmethod
    def earnings(self, entries: Sequence[WorkLogEntry], *, hourly_rate: Optional[float]) -> Earnings:
        raise NotImplementedError
