from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Callable, Optional

from ..auth.model import Actor
from ..auth.resolver import AccessResolver
from ..common.datetime_utils import now_local
from ..common.validators import (
    optional_status,
    optional_timestamp,
    require_date,
    require_int,
    require_status,
    require_work_hours,
)
from ..core.constants import ZERO_HOURS
from ..core.enums import AttendanceStatus, IdSpace
from ..core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    DuplicateRecordError,
    NoCheckInError,
    NotFoundError,
    ValidationError,
)
from ..employees.repository import EmployeeRepository
from .calculator import work_hours
from .classifier import classify_check_in
from .model import AttendanceRecord, AttendanceView
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# Marks a field the caller did not send, as opposed to an explicit null.
UNSET: Any = object()


@dataclass(frozen=True)
class CheckInResult:
    attendance: AttendanceView
    message: str


@dataclass(frozen=True)
class CheckOutResult:
    attendance: AttendanceView
    message: str

    @property
    def work_hours(self) -> Decimal:
        return self.attendance.record.work_hours


class AttendanceService:
    """Write paths: self-service check-in/check-out and HR create/update/delete.

    Per employee and day the record moves NoRecord -> CheckedIn -> Complete. Duplicate
    detection relies on the store's atomic insert, never on a read-then-insert sequence.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        access: AccessResolver,
        *,
        clock: Optional[Clock] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._access = access
        self._clock = clock or now_local

    # region Self-service
    def check_in(self, actor: Actor) -> CheckInResult:
        employee = self._access.resolve_actor_employee(actor)
        now = self._clock()
        today = now.date()
        status = classify_check_in(now)

        try:
            attendance_id = self._attendance.insert(
                employee_id=employee.employee_id,
                work_date=today,
                status=status,
                check_in=now,
                check_out=None,
                work_hours=ZERO_HOURS,
            )
        except DuplicateRecordError:
            # A row exists already. It can still take a check-in if HR created it without one.
            existing = self._attendance.get_for_employee_and_date(employee.employee_id, today)
            if (
                existing is None
                or existing.check_in is not None
                or not self._attendance.set_check_in(attendance_id=existing.attendance_id, check_in=now, status=status)
            ):
                logger.warning("Rejected repeated check-in for employee %s on %s", employee.employee_id, today)
                raise AlreadyCheckedInError("You have already checked in today") from None
            attendance_id = existing.attendance_id

        logger.info("Employee %s checked in at %s as %s", employee.employee_id, now.isoformat(), status.value)
        view = AttendanceView(record=self._load(attendance_id), employee=employee)
        return CheckInResult(
            attendance=view,
            message=f"Checked in successfully at {now:%H:%M} ({status.value})",
        )

    def check_out(self, actor: Actor) -> CheckOutResult:
        employee = self._access.resolve_actor_employee(actor)
        now = self._clock()
        today = now.date()

        record = self._attendance.get_for_employee_and_date(employee.employee_id, today)
        if record is None or record.check_in is None:
            raise NoCheckInError("You must check in before checking out")
        if record.check_out is not None:
            raise AlreadyCheckedOutError("You have already checked out today")

        hours = work_hours(record.check_in, now)
        if not self._attendance.set_check_out(attendance_id=record.attendance_id, check_out=now, work_hours=hours):
            raise AlreadyCheckedOutError("You have already checked out today")

        logger.info("Employee %s checked out at %s after %s hours", employee.employee_id, now.isoformat(), hours)
        view = AttendanceView(record=self._load(record.attendance_id), employee=employee)
        return CheckOutResult(
            attendance=view,
            message=f"Checked out successfully at {now:%H:%M}, {hours} hours worked",
        )
    # endregion

    # region Administrative
    def create_record(
        self,
        actor: Actor,
        *,
        employee_id: Any,
        work_date: Any,
        check_in: Any = None,
        check_out: Any = None,
        status: Any = None,
        id_space: IdSpace = IdSpace.EMPLOYEE,
    ) -> AttendanceView:
        self._access.require_hr(actor)
        target = self._access.resolve_target(actor, require_int(employee_id, id_space.value), id_space=id_space)
        day = require_date(work_date)
        requested_status = optional_status(status)

        check_in_at = optional_timestamp(check_in, day, "checkIn")
        check_out_at = optional_timestamp(check_out, day, "checkOut")
        _validate_pair(day, check_in_at, check_out_at)

        if check_in_at is not None:
            final_status = classify_check_in(check_in_at)
        else:
            final_status = requested_status or AttendanceStatus.ABSENT

        attendance_id = self._attendance.insert(
            employee_id=target,
            work_date=day,
            status=final_status,
            check_in=check_in_at,
            check_out=check_out_at,
            work_hours=work_hours(check_in_at, check_out_at),
        )
        logger.info("HR account %s created attendance %s for employee %s on %s", actor.user_id, attendance_id, target, day)
        return self._view(self._load(attendance_id))

    def update_record(
        self,
        actor: Actor,
        attendance_id: int,
        *,
        status: Any = UNSET,
        check_in: Any = UNSET,
        check_out: Any = UNSET,
        work_hours_override: Any = UNSET,
    ) -> AttendanceView:
        """Apply a partial HR edit.

        ``UNSET`` keeps the stored value; an explicit ``None`` clears ``check_in``/``check_out``.
        ``status`` and ``work_hours_override`` cannot be cleared, so ``None`` keeps them too.
        """
        self._access.require_hr(actor)
        record = self._load(attendance_id)

        new_status = record.status if status in (UNSET, None, "") else require_status(status)
        new_in = record.check_in if check_in is UNSET else optional_timestamp(check_in, record.work_date, "checkIn")
        new_out = record.check_out if check_out is UNSET else optional_timestamp(check_out, record.work_date, "checkOut")
        _validate_pair(record.work_date, new_in, new_out)

        times_changed = (new_in, new_out) != (record.check_in, record.check_out)
        if new_in is not None and new_out is not None:
            hours = work_hours(new_in, new_out)
        elif work_hours_override not in (UNSET, None):
            hours = require_work_hours(work_hours_override)
        elif times_changed:
            hours = ZERO_HOURS
        else:
            hours = record.work_hours

        if not self._attendance.admin_update_record(
            attendance_id=record.attendance_id,
            status=new_status,
            check_in=new_in,
            check_out=new_out,
            work_hours=hours,
        ):
            raise NotFoundError("Attendance record not found")

        logger.info("HR account %s updated attendance %s", actor.user_id, record.attendance_id)
        return self._view(self._load(record.attendance_id))

    def delete_record(self, actor: Actor, attendance_id: int) -> AttendanceView:
        self._access.require_hr(actor)
        record = self._load(attendance_id)
        if not self._attendance.delete_by_id(record.attendance_id):
            raise NotFoundError("Attendance record not found")
        logger.info("HR account %s deleted attendance %s", actor.user_id, record.attendance_id)
        return self._view(record)
    # endregion

    def _load(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise NotFoundError("Attendance record not found")
        return record

    def _view(self, record: AttendanceRecord) -> AttendanceView:
        return AttendanceView(record=record, employee=self._employees.get_by_id(record.employee_id))


def _validate_pair(work_date: date, check_in: Optional[datetime], check_out: Optional[datetime]) -> None:
    if check_out is not None and check_in is None:
        raise ValidationError("checkOut cannot be set without checkIn")
    if check_in is not None and check_in.date() != work_date:
        raise ValidationError(f"checkIn must fall on {work_date.isoformat()}")
    # A check-out may run past midnight into the next day, no further.
    if check_out is not None and not work_date <= check_out.date() <= work_date + timedelta(days=1):
        raise ValidationError(f"checkOut must fall on {work_date.isoformat()} or the following day")
    if check_in is not None and check_out is not None and check_out <= check_in:
        raise ValidationError("checkOut must be later than checkIn")
