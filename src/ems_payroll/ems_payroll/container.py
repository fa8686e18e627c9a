from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .auth.service import AuthService
from .auth.token_service import TokenService
from .database.connection import DBConfig, DatabaseConnection
from .payroll.deductions import DeductionPolicy, deduction_policy_from_rate
from .payroll.service import PayrollService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService
from .worklogs.mysql_worklog_repository import MySQLWorkLogRepository
from .worklogs.repository import WorkLogRepository
from .worklogs.service import WorkLogService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    worklogs_repo: WorkLogRepository

    token_service: TokenService
    auth_service: AuthService
    user_service: UserService
    worklog_service: WorkLogService
    payroll_service: PayrollService

    conn: Optional[DatabaseConnection] = None


def wire_services(
    users_repo: UserRepository,
    worklogs_repo: WorkLogRepository,
    *,
    token_service: TokenService,
    deductions: Optional[DeductionPolicy] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    return Container(
        users_repo=users_repo,
        worklogs_repo=worklogs_repo,
        token_service=token_service,
        auth_service=AuthService(users_repo, token_service),
        user_service=UserService(users_repo),
        worklog_service=WorkLogService(worklogs_repo),
        payroll_service=PayrollService(users_repo, worklogs_repo, deductions=deductions),
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    jwt_expiration_seconds: int,
    deduction_rate: float = 0.0,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_services(
        MySQLUserRepository(conn),
        MySQLWorkLogRepository(conn),
        token_service=TokenService(jwt_secret, ttl_seconds=jwt_expiration_seconds),
        deductions=deduction_policy_from_rate(deduction_rate),
        conn=conn,
    )
