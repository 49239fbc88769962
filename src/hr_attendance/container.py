from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.query import AttendanceQueryService
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.resolver import AccessResolver
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository


@dataclass(frozen=True)
class Container:
    attendance_repo: AttendanceRepository
    employees_repo: EmployeeRepository

    access_resolver: AccessResolver
    attendance_service: AttendanceService
    attendance_query_service: AttendanceQueryService


def wire(
    attendance_repo: AttendanceRepository,
    employees_repo: EmployeeRepository,
    *,
    clock: Optional[Callable] = None,
) -> Container:
    access_resolver = AccessResolver(employees_repo)
    return Container(
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        access_resolver=access_resolver,
        attendance_service=AttendanceService(attendance_repo, employees_repo, access_resolver, clock=clock),
        attendance_query_service=AttendanceQueryService(attendance_repo, employees_repo, access_resolver, clock=clock),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire(MySQLAttendanceRepository(conn), MySQLEmployeeRepository(conn))
