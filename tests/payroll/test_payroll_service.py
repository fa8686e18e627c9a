from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from src.ems_payroll.ems_payroll.common.datetime_utils import YearMonth
from src.ems_payroll.ems_payroll.core.enums import Role, WorkLogStatus
from src.ems_payroll.ems_payroll.core.exceptions import (
    PayrollProcessingError,
    ResourceNotFoundError,
    ValidationError,
)
from src.ems_payroll.ems_payroll.payroll.deductions import FlatRateDeductions
from src.ems_payroll.ems_payroll.payroll.service import PayrollService

FEB = YearMonth(2026, 2)


class CountingUsers:
    """Wraps a user repo and counts list_all calls."""

    def __init__(self, inner):
        self._inner = inner
        self.list_calls = 0

    def __getattr__(self, name):
        return getattr(self._inner, name)

    def list_all(self):
        self.list_calls += 1
        return self._inner.list_all()


class NegativeDeductions:
    def deductions_for(self, user, gross_pay):
        return -1.0


class GreedyDeductions:
    def deductions_for(self, user, gross_pay):
        return gross_pay + 1


@pytest.fixture
def service(users, worklogs):
    return PayrollService(users, worklogs)


def test_employee_gets_own_payroll(service, worklogs, alice, as_caller):
    worklogs.add(user_id=alice.user_id, work_date=date(2026, 2, 2), hours_worked=10, status=WorkLogStatus.APPROVED)

    record = service.calculate_for_user(caller=as_caller(alice), user_id=alice.user_id, period=FEB)

    assert record.employee_id == alice.user_id
    assert record.employee_name == "Alice Tester"
    assert record.total_hours == pytest.approx(10.0)
    assert record.regular_hours == pytest.approx(8.0)
    assert record.overtime_hours == pytest.approx(2.0)
    assert record.earnings.regular_pay == pytest.approx(200.0, abs=0.01)
    assert record.earnings.overtime_pay == pytest.approx(75.0, abs=0.01)
    assert record.gross_pay == pytest.approx(275.0, abs=0.01)
    assert record.net_pay == pytest.approx(275.0, abs=0.01)


def test_employee_cannot_read_another_payroll(service, alice, bob, as_caller):
    with pytest.raises(PayrollProcessingError) as exc:
        service.calculate_for_user(caller=as_caller(bob), user_id=alice.user_id, period=FEB)
    assert exc.value.access_denied is True


def test_admin_reads_any_payroll(service, admin, bob, as_caller):
    record = service.calculate_for_user(caller=as_caller(admin), user_id=bob.user_id, period=FEB)
    assert record.gross_pay == 0
    assert record.work_log_count == 0


def test_unknown_user(service, admin, as_caller):
    with pytest.raises(ResourceNotFoundError):
        service.calculate_for_user(caller=as_caller(admin), user_id=999, period=FEB)


def test_pay_counts_all_entries_in_month_only(service, worklogs, alice, as_caller):
    worklogs.add(user_id=alice.user_id, work_date=date(2026, 2, 2), hours_worked=8, status=WorkLogStatus.APPROVED)
    worklogs.add(user_id=alice.user_id, work_date=date(2026, 2, 3), hours_worked=4)
    worklogs.add(user_id=alice.user_id, work_date=date(2026, 3, 1), hours_worked=8, status=WorkLogStatus.APPROVED)

    record = service.calculate_for_user(caller=as_caller(alice), user_id=alice.user_id, period=FEB)

    assert record.total_hours == pytest.approx(12.0)
    assert record.approved_hours == pytest.approx(8.0)
    assert record.pending_hours == pytest.approx(4.0)
    assert record.work_log_count == 2


def test_rejected_hours_are_reported_and_still_paid(service, worklogs, alice, as_caller):
    worklogs.add(user_id=alice.user_id, work_date=date(2026, 2, 2), hours_worked=8, status=WorkLogStatus.APPROVED)
    worklogs.add(user_id=alice.user_id, work_date=date(2026, 2, 3), hours_worked=4, status=WorkLogStatus.REJECTED)

    record = service.calculate_for_user(caller=as_caller(alice), user_id=alice.user_id, period=FEB)

    assert record.rejected_hours == pytest.approx(4.0)
    assert record.pending_hours == 0
    assert record.total_hours == pytest.approx(12.0)
    assert record.gross_pay == pytest.approx(300.0, abs=0.01)


def test_user_without_rate_fails_fast(service, worklogs, users, admin, user_factory, as_caller):
    carol = users.add(user_factory(7, "carol", hourly_rate=None))
    worklogs.add(user_id=carol.user_id, work_date=date(2026, 2, 2), hours_worked=8)

    with pytest.raises(PayrollProcessingError) as exc:
        service.calculate_for_user(caller=as_caller(admin), user_id=carol.user_id, period=FEB)
    assert exc.value.access_denied is False


def test_report_requires_admin_before_listing_users(users, worklogs, alice, as_caller):
    counting = CountingUsers(users)
    service = PayrollService(counting, worklogs)

    with pytest.raises(PayrollProcessingError):
        service.generate_report(caller=as_caller(alice), period=FEB)
    with pytest.raises(PayrollProcessingError):
        service.summarize(caller=as_caller(alice), start=FEB, end=FEB)
    assert counting.list_calls == 0


def test_report_covers_every_paid_user(service, worklogs, admin, alice, bob, as_caller):
    worklogs.add(user_id=alice.user_id, work_date=date(2026, 2, 2), hours_worked=8)
    worklogs.add(user_id=bob.user_id, work_date=date(2026, 2, 2), hours_worked=10)

    report = service.generate_report(caller=as_caller(admin), period=FEB)

    # The admin has no rate and no work logs, so there is nothing to pay.
    assert [r.username for r in report] == ["alice", "bob"]
    assert report[1].gross_pay == pytest.approx(8 * 20 + 2 * 20 * 1.5)


def test_summary_totals_match_sum_of_gross(service, worklogs, admin, alice, bob, as_caller):
    worklogs.add(user_id=alice.user_id, work_date=date(2026, 1, 5), hours_worked=8)
    worklogs.add(user_id=alice.user_id, work_date=date(2026, 2, 2), hours_worked=10)
    worklogs.add(user_id=bob.user_id, work_date=date(2026, 2, 2), hours_worked=5)

    summary = service.summarize(caller=as_caller(admin), start=YearMonth(2026, 1), end=FEB)

    alice_gross = 8 * 25 + 275.0
    bob_gross = 5 * 20
    assert summary.total_payroll == pytest.approx(alice_gross + bob_gross, abs=0.01)
    assert summary.total_employees == 2
    assert summary.total_hours == pytest.approx(23.0)
    assert summary.department_totals == pytest.approx({"Engineering": alice_gross, "Sales": bob_gross})
    assert summary.average_pay_per_employee == pytest.approx((alice_gross + bob_gross) / 2, abs=0.01)


def test_summary_rejects_reversed_range(service, admin, as_caller):
    with pytest.raises(ValidationError):
        service.summarize(caller=as_caller(admin), start=FEB, end=YearMonth(2026, 1))


def test_flat_rate_deductions(users, worklogs, alice, as_caller):
    service = PayrollService(users, worklogs, deductions=FlatRateDeductions(0.2))
    worklogs.add(user_id=alice.user_id, work_date=date(2026, 2, 2), hours_worked=10)

    record = service.calculate_for_user(caller=as_caller(alice), user_id=alice.user_id, period=FEB)

    assert record.deductions == pytest.approx(55.0, abs=0.01)
    assert record.net_pay == pytest.approx(220.0, abs=0.01)


@pytest.mark.parametrize("policy", [NegativeDeductions(), GreedyDeductions()])
def test_invalid_deductions_fail(users, worklogs, alice, as_caller, policy):
    service = PayrollService(users, worklogs, deductions=policy)
    worklogs.add(user_id=alice.user_id, work_date=date(2026, 2, 2), hours_worked=8)

    with pytest.raises(PayrollProcessingError):
        service.calculate_for_user(caller=as_caller(alice), user_id=alice.user_id, period=FEB)


@pytest.mark.parametrize("rate", [-0.1, 1.0])
def test_flat_rate_bounds(rate):
    with pytest.raises(ValueError):
        FlatRateDeductions(rate)


def test_demoted_admin_loses_report_access(service, users, admin, as_caller):
    demoted = replace(admin, role=Role.EMPLOYEE)
    with pytest.raises(PayrollProcessingError):
        service.generate_report(caller=as_caller(demoted), period=FEB)
