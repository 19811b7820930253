from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import parse_clock
from .core.constants import DEFAULT_STATS_WINDOW_DAYS, DEFAULT_TOKEN_HOURS, DEFAULT_WORK_START
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .reporting.service import ReportingService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, TokenService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository

    token_service: TokenService
    auth_service: AuthService
    user_service: UserService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    reporting_service: ReportingService


def wire_container(
    *,
    users_repo: UserRepository,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    jwt_secret: str,
    jwt_expires_hours: int = DEFAULT_TOKEN_HOURS,
    work_start: time = parse_clock(DEFAULT_WORK_START),
    stats_window_days: int = DEFAULT_STATS_WINDOW_DAYS,
) -> Container:
    """Assemble services over any repository implementation (MySQL or in-memory)."""
    token_service = TokenService(jwt_secret, expires_hours=jwt_expires_hours)

    return Container(
        users_repo=users_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        token_service=token_service,
        auth_service=AuthService(users_repo, token_service),
        user_service=UserService(users_repo),
        employee_service=EmployeeService(employees_repo),
        attendance_service=AttendanceService(attendance_repo, employees_repo),
        reporting_service=ReportingService(
            attendance_repo,
            employees_repo,
            work_start=work_start,
            window_days=stats_window_days,
        ),
    )


def build_container(*, db_config: dict, jwt_secret: str, **options) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        users_repo=MySQLUserRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        jwt_secret=jwt_secret,
        **options,
    )
