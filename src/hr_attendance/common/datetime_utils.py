from __future__ import annotations

from datetime import date, datetime, time, timedelta


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_clock_time(value: str) -> time:
    """Parse HH:MM or HH:MM:SS wall-clock string into time."""
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid time string: {value!r}")


def parse_timestamp_on(work_date: date, value: str) -> datetime:
    """Parse either a bare wall-clock time (placed on ``work_date``) or a full ISO timestamp."""
    value = value.strip()
    if "T" in value or " " in value:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        # Single server-local wall clock: drop any offset after parsing.
        return parsed.replace(tzinfo=None)
    return datetime.combine(work_date, parse_clock_time(value))


def minutes_since_midnight(value: time) -> int:
    return value.hour * 60 + value.minute


def month_range(year: int, month: int) -> tuple[date, date]:
    """Half-open [first day of month, first day of next month)."""
    start = date(year, month, 1)
    if month == 12:
        return start, date(year + 1, 1, 1)
    return start, date(year, month + 1, 1)


def day_range(day: date) -> tuple[date, date]:
    return day, day + timedelta(days=1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
