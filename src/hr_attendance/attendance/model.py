from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.constants import ZERO_HOURS
from ..core.enums import AttendanceStatus
from ..employees.model import Employee


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day."""

    attendance_id: int
    employee_id: int
    work_date: date
    status: AttendanceStatus
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    work_hours: Decimal = ZERO_HOURS
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceView:
    """Read-model returned to callers: the record plus the employee's display attributes."""

    record: AttendanceRecord
    employee: Optional[Employee] = None

    def to_dict(self) -> dict:
        r = self.record
        employee = self.employee.to_display() if self.employee else {"employeeId": r.employee_id}
        return {
            "id": r.attendance_id,
            "employee": employee,
            "date": r.work_date.isoformat(),
            "status": r.status.value,
            "checkIn": _iso(r.check_in),
            "checkOut": _iso(r.check_out),
            "workHours": float(r.work_hours),
            "createdAt": _iso(r.created_at),
            "updatedAt": _iso(r.updated_at),
        }


@dataclass(frozen=True)
class AttendanceFilter:
    """Compound filter; every field is optional. ``end_date`` is exclusive."""

    employee_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[AttendanceStatus] = None


@dataclass(frozen=True)
class AttendanceSummary:
    total_records: int
    total_work_hours: Decimal
    by_status: dict[AttendanceStatus, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "totalRecords": self.total_records,
            "totalWorkHours": float(self.total_work_hours),
            "byStatus": {s.value: self.by_status.get(s, 0) for s in AttendanceStatus},
        }
