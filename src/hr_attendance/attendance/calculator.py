from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..core.constants import WORK_HOURS_QUANTUM, ZERO_HOURS

_SECONDS_PER_HOUR = Decimal(3600)


def work_hours(check_in: Optional[datetime], check_out: Optional[datetime]) -> Decimal:
    """(out - in) in hours, rounded half-up to 2 decimals; 0 when a bound is missing or out <= in."""
    if check_in is None or check_out is None or check_out <= check_in:
        return ZERO_HOURS
    delta = check_out - check_in
    seconds = Decimal(delta.days * 86400 + delta.seconds) + Decimal(delta.microseconds) / Decimal(1_000_000)
    return (seconds / _SECONDS_PER_HOUR).quantize(WORK_HOURS_QUANTUM, rounding=ROUND_HALF_UP)
