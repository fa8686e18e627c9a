from __future__ import annotations

from datetime import date, datetime

import pytest

from src.ems_payroll.ems_payroll.core.enums import WorkLogStatus
from src.ems_payroll.ems_payroll.core.exceptions import PayrollProcessingError
from src.ems_payroll.ems_payroll.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.ems_payroll.ems_payroll.worklogs.model import WorkLogEntry


def _entry(hours, day=2):
    ts = datetime(2026, 2, day, 18, 0)
    return WorkLogEntry(
        worklog_id=day,
        user_id=1,
        work_date=date(2026, 2, day),
        hours_worked=hours,
        status=WorkLogStatus.APPROVED,
        created_at=ts,
        updated_at=ts,
    )


def test_ten_hours_at_25_pays_time_and_a_half_for_overtime():
    earnings = StandardPayrollCalculator().earnings([_entry(10)], hourly_rate=25.0)

    assert earnings.regular_pay == pytest.approx(200.0, abs=0.01)
    assert earnings.overtime_pay == pytest.approx(75.0, abs=0.01)
    assert earnings.gross_pay == pytest.approx(275.0, abs=0.01)


def test_overtime_cap_applies_per_day_not_per_month():
    # 2 x 6h stays regular even though the total is above 8.
    earnings = StandardPayrollCalculator().earnings([_entry(6, 2), _entry(6, 3)], hourly_rate=10.0)

    assert earnings.regular_pay == pytest.approx(120.0)
    assert earnings.overtime_pay == 0


def test_no_entries_pays_nothing():
    assert StandardPayrollCalculator().earnings([], hourly_rate=25.0).gross_pay == 0


def test_split_hours():
    calc = StandardPayrollCalculator()
    assert calc.split_hours(_entry(7.5)) == (7.5, 0.0)
    assert calc.split_hours(_entry(12)) == (8.0, 4.0)


@pytest.mark.parametrize("rate", [None, -1.0, float("nan"), float("inf")])
def test_missing_negative_or_non_finite_rate_fails_fast(rate):
    with pytest.raises(PayrollProcessingError):
        StandardPayrollCalculator().earnings([_entry(8)], hourly_rate=rate)


def test_money_is_rounded_to_cents():
    earnings = StandardPayrollCalculator().earnings([_entry(1 / 3)], hourly_rate=10.0)
    assert earnings.gross_pay == 3.33
