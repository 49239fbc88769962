from __future__ import annotations

from typing import Iterable, Mapping, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, placeholders
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, user_id, name, email, position, department"


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        position=row.get("position"),
        department=row.get("department"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_many(self, employee_ids: Iterable[int]) -> Mapping[int, Employee]:
        ids = sorted({int(i) for i in employee_ids})
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE employee_id IN ({placeholders(len(ids))})",
                tuple(ids),
            )
            return {e.employee_id: e for e in (_to_employee(r) for r in fetchall(cur))}
