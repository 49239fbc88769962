from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.constants import FILTER_ALL
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_timestamp_on


def require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "" or value == FILTER_ALL:
        return None
    return require_int(value, field_name)


def require_date(value: Any, field_name: str = "date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        raise ValidationError(f"{field_name} is required (YYYY-MM-DD)")
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        raise ValidationError(f"Invalid {field_name} format. Use YYYY-MM-DD") from None


def optional_timestamp(value: Any, work_date: date, field_name: str) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a time (HH:MM) or ISO timestamp")
    try:
        return parse_timestamp_on(work_date, value)
    except ValueError:
        raise ValidationError(f"Invalid {field_name} format. Use HH:MM or an ISO timestamp") from None


def require_status(value: Any) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"Invalid status {value!r}. Expected one of: {allowed}") from None


def optional_status(value: Any) -> Optional[AttendanceStatus]:
    if value is None or value == "" or value == FILTER_ALL:
        return None
    return require_status(value)


def require_work_hours(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError("workHours must be a number")
    try:
        hours = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError("workHours must be a number") from None
    if not hours.is_finite() or hours < 0:
        raise ValidationError("workHours must be a non-negative number")
    return hours
