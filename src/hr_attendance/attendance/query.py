from __future__ import annotations

from collections import Counter
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Optional, Sequence

from ..auth.model import Actor
from ..auth.resolver import AccessResolver
from ..common.datetime_utils import day_range, month_range, now_local
from ..common.validators import optional_int, optional_status, require_date
from ..core.constants import ZERO_HOURS
from ..core.enums import IdSpace
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from .model import AttendanceFilter, AttendanceRecord, AttendanceSummary, AttendanceView
from .repository import AttendanceRepository


def build_filter(
    *,
    employee_id: Optional[int] = None,
    month: Any = None,
    year: Any = None,
    day: Any = None,
    status: Any = None,
) -> AttendanceFilter:
    """Combine independently-optional parameters into one filter.

    ``(month, year)`` selects a whole month, ``day`` a single day; they are mutually exclusive.
    """
    month_value = optional_int(month, "month")
    year_value = optional_int(year, "year")
    start: Optional[date] = None
    end: Optional[date] = None

    if (month_value is None) != (year_value is None):
        raise ValidationError("month and year must be supplied together")

    if month_value is not None and year_value is not None:
        if day not in (None, ""):
            raise ValidationError("Use either month/year or date, not both")
        if not 1 <= month_value <= 12:
            raise ValidationError("month must be between 1 and 12")
        if not 1 <= year_value <= 9999:
            raise ValidationError("year is out of range")
        start, end = month_range(year_value, month_value)
    elif day not in (None, ""):
        start, end = day_range(require_date(day))

    return AttendanceFilter(employee_id=employee_id, start_date=start, end_date=end, status=optional_status(status))


class AttendanceQueryService:
    """Read paths for employees (scoped to themselves) and HR (any employee)."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        access: AccessResolver,
        *,
        clock: Optional[Callable] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._access = access
        self._clock = clock or now_local

    def list_for_employee(
        self,
        actor: Actor,
        target_id: int,
        *,
        month: Any = None,
        year: Any = None,
        day: Any = None,
        id_space: IdSpace = IdSpace.EMPLOYEE,
    ) -> list[AttendanceView]:
        employee_id = self._access.resolve_target(actor, target_id, id_space=id_space)
        criteria = build_filter(employee_id=employee_id, month=month, year=year, day=day)
        return self._enrich(self._attendance.find(criteria))

    def list_all(
        self,
        actor: Actor,
        *,
        month: Any = None,
        year: Any = None,
        employee_id: Any = None,
        status: Any = None,
    ) -> list[AttendanceView]:
        return self._enrich(self._find_all(actor, month=month, year=year, employee_id=employee_id, status=status))

    def today(self, actor: Actor) -> Optional[AttendanceView]:
        employee = self._access.resolve_actor_employee(actor)
        criteria = build_filter(employee_id=employee.employee_id, day=self._clock().date())
        records = self._attendance.find(criteria)
        return AttendanceView(record=records[0], employee=employee) if records else None

    def summarize(
        self,
        actor: Actor,
        *,
        month: Any = None,
        year: Any = None,
        employee_id: Any = None,
        status: Any = None,
    ) -> AttendanceSummary:
        records = self._find_all(actor, month=month, year=year, employee_id=employee_id, status=status)
        counts = Counter(r.status for r in records)
        total: Decimal = sum((r.work_hours for r in records), ZERO_HOURS)
        return AttendanceSummary(total_records=len(records), total_work_hours=total, by_status=dict(counts))

    def _find_all(self, actor: Actor, *, month, year, employee_id, status) -> Sequence[AttendanceRecord]:
        self._access.require_hr(actor)
        target = optional_int(employee_id, "employee")
        if target is not None:
            target = self._access.resolve_target(actor, target)
        criteria = build_filter(employee_id=target, month=month, year=year, status=status)
        return self._attendance.find(criteria)

    def _enrich(self, records: Sequence[AttendanceRecord]) -> list[AttendanceView]:
        employees = self._employees.get_many(r.employee_id for r in records)
        return [AttendanceView(record=r, employee=employees.get(r.employee_id)) for r in records]
