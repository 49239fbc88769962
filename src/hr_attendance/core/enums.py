from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account roles used for authorization."""

    EMPLOYEE = "employee"
    HR = "hr"


class AttendanceStatus(str, Enum):
    """Work-day status stored on an attendance record."""

    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"
    HALF_DAY = "Half-day"


class IdSpace(str, Enum):
    """Which identifier space a target id belongs to."""

    EMPLOYEE = "employee"
    ACCOUNT = "account"
