"""Check-in status rules.

Single place that turns a check-in wall-clock time into a work-day status; both the
self-service check-in and the administrative create path call it.
"""
from __future__ import annotations

from datetime import datetime, time
from typing import Union

from ..common.datetime_utils import minutes_since_midnight
from ..core.constants import LATE_BEFORE_MINUTES, PRESENT_BEFORE_MINUTES
from ..core.enums import AttendanceStatus

# Ordered (exclusive upper bound in minutes since midnight, status).
_THRESHOLDS = (
    (PRESENT_BEFORE_MINUTES, AttendanceStatus.PRESENT),
    (LATE_BEFORE_MINUTES, AttendanceStatus.LATE),
)
_FALLBACK = AttendanceStatus.HALF_DAY


def classify_check_in(check_in: Union[time, datetime]) -> AttendanceStatus:
    """Present before 09:00, Late from 09:00 to 09:59, Half-day from 10:00.

    Never returns ``Absent``; that status only exists as a record default.
    """
    wall_clock = check_in.time() if isinstance(check_in, datetime) else check_in
    minutes = minutes_since_midnight(wall_clock)
    for upper_bound, status in _THRESHOLDS:
        if minutes < upper_bound:
            return status
    return _FALLBACK
