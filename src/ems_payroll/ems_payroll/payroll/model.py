from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..common.datetime_utils import YearMonth


def to_cents(value: float) -> float:
    return round(float(value), 2)


@dataclass(frozen=True)
class Earnings:
    regular_pay: float = 0.0
    overtime_pay: float = 0.0
    gross_pay: float = 0.0


@dataclass(frozen=True)
class PayrollRecord:
    """Pay for one employee over one calendar month.

    Derived from the work logs on every request and never stored.
    """

    employee_id: int
    employee_name: str
    username: str
    department: Optional[str]
    position: Optional[str]
    hourly_rate: float
    period: YearMonth
    total_hours: float
    approved_hours: float
    pending_hours: float
    rejected_hours: float
    regular_hours: float
    overtime_hours: float
    earnings: Earnings
    deductions: float
    net_pay: float
    work_log_count: int

    @property
    def gross_pay(self) -> float:
        return self.earnings.gross_pay


@dataclass(frozen=True)
class PayrollSummary:
    start_period: YearMonth
    end_period: YearMonth
    total_payroll: float = 0.0
    total_net_pay: float = 0.0
    total_deductions: float = 0.0
    total_hours: float = 0.0
    total_employees: int = 0
    department_totals: dict[str, float] = field(default_factory=dict)

    @property
    def average_pay_per_employee(self) -> float:
        if not self.total_employees:
            return 0.0
        return to_cents(self.total_payroll / self.total_employees)
