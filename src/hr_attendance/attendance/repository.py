from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceFilter, AttendanceRecord


class AttendanceRepository(Protocol):
    """Attendance store.

    Owns the one-record-per-(employee, day) invariant: ``insert`` must be an atomic
    create-or-reject that raises ``DuplicateRecordError`` when the pair already exists.
    The ``set_*`` methods are conditional updates and return False when the guard fails.
    """

    def insert(
        self,
        *,
        employee_id: int,
        work_date: date,
        status: AttendanceStatus,
        check_in: Optional[datetime],
        check_out: Optional[datetime],
        work_hours: Decimal,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def set_check_in(self, *, attendance_id: int, check_in: datetime, status: AttendanceStatus) -> bool:
        """Fill check-in only while it is still unset."""

        raise NotImplementedError

    def set_check_out(self, *, attendance_id: int, check_out: datetime, work_hours: Decimal) -> bool:
        """Fill check-out only while check-in is set and check-out is unset."""

        raise NotImplementedError

    def admin_update_record(
        self,
        *,
        attendance_id: int,
        status: AttendanceStatus,
        check_in: Optional[datetime],
        check_out: Optional[datetime],
        work_hours: Decimal,
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, attendance_id: int) -> bool:
        raise NotImplementedError

    def find(self, criteria: AttendanceFilter) -> Sequence[AttendanceRecord]:
        """Matching records, most recent work date first."""

        raise NotImplementedError
