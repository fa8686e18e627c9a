from __future__ import annotations

import logging
from collections import defaultdict
from typing import Optional, Sequence

from ..auth.guard import require_owner_or_admin, require_role
from ..auth.model import Caller
from ..common.datetime_utils import YearMonth, iter_months
from ..core.enums import Role, WorkLogStatus
from ..core.exceptions import (
    PayrollProcessingError,
    ResourceNotFoundError,
    UnauthorizedAccessError,
    ValidationError,
)
from ..users.model import User
from ..users.repository import UserRepository
from ..worklogs.repository import WorkLogRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .deductions import DeductionPolicy, NoDeductions
from .model import PayrollRecord, PayrollSummary, to_cents

logger = logging.getLogger(__name__)

NO_DEPARTMENT = "Unassigned"


class PayrollService:
    """Use case: compute monthly pay from work logs.

    Records are computed on every call from the current work-log state.
    Reads are a best-effort snapshot and are not serialized against writers.
    """

    def __init__(
        self,
        users: UserRepository,
        worklogs: WorkLogRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        deductions: Optional[DeductionPolicy] = None,
    ):
        self._users = users
        self._worklogs = worklogs
        self._calculator = calculator or StandardPayrollCalculator()
        self._deductions = deductions or NoDeductions()

    @staticmethod
    def _require_admin(caller: Optional[Caller]) -> None:
        try:
            require_role(caller, Role.ADMIN)
        except UnauthorizedAccessError as exc:
            raise PayrollProcessingError(str(exc), access_denied=True) from exc

    def calculate_for_user(self, *, caller: Optional[Caller], user_id: int, period: YearMonth) -> PayrollRecord:
        try:
            require_owner_or_admin(caller, user_id)
        except UnauthorizedAccessError as exc:
            raise PayrollProcessingError("You can only view your own payroll", access_denied=True) from exc

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise ResourceNotFoundError(f"User not found with id: {user_id}")
        return self._compute(user, period)

    def generate_report(self, *, caller: Optional[Caller], period: YearMonth) -> list[PayrollRecord]:
        """Payroll of every user for ``period``, ordered by employee id.

        Users with no hourly rate and no work logs in the period have nothing
        to pay and are left out. A user with work logs but no rate fails the
        whole report.
        """

        self._require_admin(caller)

        records: list[PayrollRecord] = []
        for user in sorted(self._users.list_all(), key=lambda u: u.user_id):
            entries = self._entries(user, period)
            if user.hourly_rate is None and not entries:
                logger.debug("Skipping %s for %s: no rate, no work logs", user.username, period)
                continue
            records.append(self._build_record(user, period, entries))
        logger.info("Payroll report for %s: %s records", period, len(records))
        return records

    def summarize(self, *, caller: Optional[Caller], start: YearMonth, end: YearMonth) -> PayrollSummary:
        self._require_admin(caller)
        if end < start:
            raise ValidationError("End month must not be before start month")

        total_payroll = 0.0
        total_net = 0.0
        total_deductions = 0.0
        total_hours = 0.0
        employees: set[int] = set()
        departments: dict[str, float] = defaultdict(float)

        for month in iter_months(start, end):
            for r in self.generate_report(caller=caller, period=month):
                total_payroll += r.gross_pay
                total_net += r.net_pay
                total_deductions += r.deductions
                total_hours += r.total_hours
                employees.add(r.employee_id)
                departments[r.department or NO_DEPARTMENT] += r.gross_pay

        return PayrollSummary(
            start_period=start,
            end_period=end,
            total_payroll=to_cents(total_payroll),
            total_net_pay=to_cents(total_net),
            total_deductions=to_cents(total_deductions),
            total_hours=round(total_hours, 2),
            total_employees=len(employees),
            department_totals={k: to_cents(v) for k, v in sorted(departments.items())},
        )

    def _entries(self, user: User, period: YearMonth):
        return self._worklogs.list_for_user_between(
            user_id=user.user_id,
            start=period.first_day,
            end=period.last_day,
        )

    def _compute(self, user: User, period: YearMonth) -> PayrollRecord:
        return self._build_record(user, period, self._entries(user, period))

    def _build_record(self, user: User, period: YearMonth, entries: Sequence) -> PayrollRecord:
        entries = [e for e in entries if period.contains(e.work_date)]
        earnings = self._calculator.earnings(entries, hourly_rate=user.hourly_rate)

        deductions = float(self._deductions.deductions_for(user, earnings.gross_pay))
        if deductions < 0:
            raise PayrollProcessingError(f"Negative deductions computed for {user.username}")
        if deductions > earnings.gross_pay:
            raise PayrollProcessingError(f"Deductions exceed gross pay for {user.username}")
        deductions = to_cents(deductions)

        regular_hours = 0.0
        overtime_hours = 0.0
        for e in entries:
            regular, overtime = self._calculator.split_hours(e)
            regular_hours += regular
            overtime_hours += overtime

        def hours_with(status: WorkLogStatus) -> float:
            return round(sum(e.hours_worked for e in entries if e.status == status), 2)

        return PayrollRecord(
            employee_id=user.user_id,
            employee_name=user.full_name,
            username=user.username,
            department=user.department,
            position=user.position,
            hourly_rate=float(user.hourly_rate),
            period=period,
            total_hours=round(sum(e.hours_worked for e in entries), 2),
            approved_hours=hours_with(WorkLogStatus.APPROVED),
            pending_hours=hours_with(WorkLogStatus.PENDING),
            rejected_hours=hours_with(WorkLogStatus.REJECTED),
            regular_hours=round(regular_hours, 2),
            overtime_hours=round(overtime_hours, 2),
            earnings=earnings,
            deductions=deductions,
            net_pay=to_cents(earnings.gross_pay - deductions),
            work_log_count=len(entries),
        )
