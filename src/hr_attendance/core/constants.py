"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

# Check-in thresholds, in minutes since midnight.
PRESENT_BEFORE_MINUTES = 9 * 60
LATE_BEFORE_MINUTES = 10 * 60

WORK_HOURS_QUANTUM = Decimal("0.01")
ZERO_HOURS = Decimal("0.00")

FILTER_ALL = "all"
