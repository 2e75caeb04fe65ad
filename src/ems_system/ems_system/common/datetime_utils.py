from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from ..core.constants import HOURS_QUANTUM, SECONDS_PER_HOUR


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def days_in_month(month: int, year: int) -> int:
    return calendar.monthrange(int(year), int(month))[1]


def month_bounds(month: int, year: int) -> tuple[date, date]:
    """First and last calendar day of (month, year)."""
    first = date(int(year), int(month), 1)
    return first, first + timedelta(days=days_in_month(month, year) - 1)


def inclusive_days(start: date, end: date) -> int:
    """Number of calendar days in [start, end], both ends counted."""
    return (end - start).days + 1


def elapsed_hours(start: datetime, end: datetime) -> Decimal:
    """Wall-clock hours between two instants, rounded half-up to 2 decimals."""
    seconds = Decimal(str((end - start).total_seconds()))
    return (seconds / SECONDS_PER_HOUR).quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)
