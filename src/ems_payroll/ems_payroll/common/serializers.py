"""Domain objects -> JSON-ready dicts (camelCase keys)."""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..auth.model import AuthResponse
from ..payroll.model import PayrollRecord, PayrollSummary
from ..users.model import User
from ..worklogs.model import MonthlyWorkSummary, WorkLogEntry


def _iso(value: Optional[date]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.replace(microsecond=0).isoformat()
    return value.strftime("%Y-%m-%d")


def user_json(u: User) -> dict:
    return {
        "id": u.user_id,
        "username": u.username,
        "email": u.email,
        "firstName": u.first_name,
        "lastName": u.last_name,
        "fullName": u.full_name,
        "role": u.role.value,
        "department": u.department,
        "position": u.position,
        "hourlyRate": u.hourly_rate,
        "enabled": u.enabled,
        "createdAt": _iso(u.created_at),
        "updatedAt": _iso(u.updated_at),
    }


def auth_json(a: AuthResponse) -> dict:
    return {
        "token": a.token,
        "type": "Bearer",
        "username": a.username,
        "email": a.email,
        "firstName": a.first_name,
        "lastName": a.last_name,
        "role": a.role.value,
        "message": a.message,
    }


def worklog_json(e: WorkLogEntry) -> dict:
    return {
        "id": e.worklog_id,
        "userId": e.user_id,
        "date": _iso(e.work_date),
        "hoursWorked": e.hours_worked,
        "regularHours": e.regular_hours,
        "overtimeHours": e.overtime_hours,
        "remarks": e.remarks,
        "status": e.status.value,
        "createdAt": _iso(e.created_at),
        "updatedAt": _iso(e.updated_at),
    }


def monthly_summary_json(s: MonthlyWorkSummary) -> dict:
    return {
        "yearMonth": str(s.year_month),
        "totalHours": round(s.total_hours, 2),
        "approvedHours": round(s.approved_hours, 2),
        "pendingHours": round(s.pending_hours, 2),
        "rejectedHours": round(s.rejected_hours, 2),
        "overtimeHours": round(s.overtime_hours, 2),
        "averageHoursPerDay": s.average_hours_per_day,
        "workDaysCount": s.work_days_count,
        "totalWorkLogs": s.total_work_logs,
        "approvedWorkLogs": s.approved_work_logs,
        "pendingWorkLogs": s.pending_work_logs,
        "rejectedWorkLogs": s.rejected_work_logs,
    }


def payroll_record_json(r: PayrollRecord) -> dict:
    return {
        "employeeId": r.employee_id,
        "employeeName": r.employee_name,
        "username": r.username,
        "department": r.department,
        "position": r.position,
        "hourlyRate": r.hourly_rate,
        "period": str(r.period),
        "totalHours": r.total_hours,
        "approvedHours": r.approved_hours,
        "pendingHours": r.pending_hours,
        "rejectedHours": r.rejected_hours,
        "regularHours": r.regular_hours,
        "overtimeHours": r.overtime_hours,
        "earnings": {
            "regularPay": r.earnings.regular_pay,
            "overtimePay": r.earnings.overtime_pay,
            "grossPay": r.earnings.gross_pay,
        },
        "deductions": r.deductions,
        "netPay": r.net_pay,
        "workLogCount": r.work_log_count,
    }


def payroll_summary_json(s: PayrollSummary) -> dict:
    return {
        "startPeriod": str(s.start_period),
        "endPeriod": str(s.end_period),
        "totalPayroll": s.total_payroll,
        "totalNetPay": s.total_net_pay,
        "totalDeductions": s.total_deductions,
        "totalHours": s.total_hours,
        "totalEmployees": s.total_employees,
        "departmentTotals": dict(s.department_totals),
        "averagePayPerEmployee": s.average_pay_per_employee,
    }
