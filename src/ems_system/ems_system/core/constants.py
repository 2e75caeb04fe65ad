"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_WORKING_DAYS_PER_MONTH = 26
DEFAULT_HOURS_PER_DAY = 8

MONEY_QUANTUM = Decimal("0.01")
HOURS_QUANTUM = Decimal("0.01")
RATE_QUANTUM = Decimal("0.0001")

SECONDS_PER_HOUR = 3600
