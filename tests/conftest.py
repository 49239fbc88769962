from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional

import pytest

from hr_attendance.attendance.model import AttendanceFilter, AttendanceRecord
from hr_attendance.auth.model import Actor
from hr_attendance.container import wire
from hr_attendance.core.enums import AttendanceStatus, Role
from hr_attendance.core.exceptions import DuplicateRecordError
from hr_attendance.employees.model import Employee


class InMemoryEmployees:
    def __init__(self, employees: Iterable[Employee]):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.user_id == user_id), None)

    def get_many(self, employee_ids):
        return {i: self._by_id[i] for i in set(employee_ids) if i in self._by_id}


class InMemoryAttendance:
    """Thread-safe store with a unique (employee_id, work_date) index, like the real table."""

    def __init__(self):
        self._lock = threading.Lock()
        self._records: dict[int, AttendanceRecord] = {}
        self._by_employee_day: dict[tuple[int, date], int] = {}
        self._id = 0

    def insert(self, *, employee_id, work_date, status, check_in, check_out, work_hours) -> int:
        with self._lock:
            key = (employee_id, work_date)
            if key in self._by_employee_day:
                raise DuplicateRecordError("Attendance record already exists for this date")
            self._id += 1
            self._records[self._id] = AttendanceRecord(
                attendance_id=self._id,
                employee_id=employee_id,
                work_date=work_date,
                status=status,
                check_in=check_in,
                check_out=check_out,
                work_hours=work_hours,
            )
            self._by_employee_day[key] = self._id
            return self._id

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self._records.get(attendance_id)

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with self._lock:
            attendance_id = self._by_employee_day.get((employee_id, work_date))
            return self._records.get(attendance_id) if attendance_id else None

    def set_check_in(self, *, attendance_id, check_in, status) -> bool:
        with self._lock:
            rec = self._records.get(attendance_id)
            if not rec or rec.check_in is not None:
                return False
            self._records[attendance_id] = replace(rec, check_in=check_in, status=status)
            return True

    def set_check_out(self, *, attendance_id, check_out, work_hours) -> bool:
        with self._lock:
            rec = self._records.get(attendance_id)
            if not rec or rec.check_in is None or rec.check_out is not None:
                return False
            self._records[attendance_id] = replace(rec, check_out=check_out, work_hours=work_hours)
            return True

    def admin_update_record(self, *, attendance_id, status, check_in, check_out, work_hours) -> bool:
        with self._lock:
            rec = self._records.get(attendance_id)
            if not rec:
                return False
            self._records[attendance_id] = replace(
                rec, status=status, check_in=check_in, check_out=check_out, work_hours=work_hours
            )
            return True

    def delete_by_id(self, attendance_id: int) -> bool:
        with self._lock:
            rec = self._records.pop(attendance_id, None)
            if not rec:
                return False
            del self._by_employee_day[(rec.employee_id, rec.work_date)]
            return True

    def find(self, criteria: AttendanceFilter):
        items = [
            r
            for r in self._records.values()
            if (criteria.employee_id is None or r.employee_id == criteria.employee_id)
            and (criteria.start_date is None or r.work_date >= criteria.start_date)
            and (criteria.end_date is None or r.work_date < criteria.end_date)
            and (criteria.status is None or r.status == criteria.status)
        ]
        items.sort(key=lambda r: (r.work_date, r.attendance_id), reverse=True)
        return items

    def seed(self, employee_id: int, work_date: date, status: AttendanceStatus, **fields) -> int:
        return self.insert(
            employee_id=employee_id,
            work_date=work_date,
            status=status,
            check_in=fields.get("check_in"),
            check_out=fields.get("check_out"),
            work_hours=fields.get("work_hours", Decimal("0.00")),
        )


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, hour: int, minute: int = 0) -> None:
        self.now = self.now.replace(hour=hour, minute=minute, second=0, microsecond=0)


# Account ids and employee-record ids differ for these three.
ALICE = Employee(employee_id=10, user_id=1, name="Alice Nguyen", email="alice@example.com")
BOB = Employee(employee_id=20, user_id=2, name="Bob Tran", email="bob@example.com")
HANNA = Employee(employee_id=30, user_id=3, name="Hanna HR", email="hanna@example.com")
# These two overlap the spaces: Carl's employee id equals Alice's account id,
# Dana's employee id equals Carl's account id.
CARL = Employee(employee_id=1, user_id=4, name="Carl Le", email="carl@example.com")
DANA = Employee(employee_id=4, user_id=5, name="Dana Pham", email="dana@example.com")


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 3, 4, 9, 30))


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def employees_repo():
    return InMemoryEmployees([ALICE, BOB, HANNA, CARL, DANA])


@pytest.fixture
def container(attendance_repo, employees_repo, clock):
    return wire(attendance_repo, employees_repo, clock=clock)


@pytest.fixture
def service(container):
    return container.attendance_service


@pytest.fixture
def queries(container):
    return container.attendance_query_service


@pytest.fixture
def alice():
    return Actor(user_id=ALICE.user_id, role=Role.EMPLOYEE)


@pytest.fixture
def bob():
    return Actor(user_id=BOB.user_id, role=Role.EMPLOYEE)


@pytest.fixture
def hr():
    return Actor(user_id=HANNA.user_id, role=Role.HR)


@pytest.fixture
def carl():
    return Actor(user_id=CARL.user_id, role=Role.EMPLOYEE)
