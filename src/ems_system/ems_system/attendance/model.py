from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per (employee, date)."""

    attendance_id: int
    employee_id: int
    work_date: date
    check_in: datetime
    check_out: Optional[datetime] = None
    total_hours: Optional[Decimal] = None

    @property
    def is_checked_out(self) -> bool:
        return self.check_out is not None

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "check_in": self.check_in.isoformat(),
            "check_out": self.check_out.isoformat() if self.check_out else None,
            "total_hours": float(self.total_hours) if self.total_hours is not None else None,
        }


@dataclass(frozen=True)
class AttendanceStatusView:
    checked_in: bool
    checked_out: bool
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    # None while checked in and not yet checked out.
    total_hours: Optional[Decimal] = Decimal("0")

    def to_dict(self) -> dict:
        return {
            "checked_in": self.checked_in,
            "checked_out": self.checked_out,
            "check_in": self.check_in.isoformat() if self.check_in else None,
            "check_out": self.check_out.isoformat() if self.check_out else None,
            "total_hours": float(self.total_hours) if self.total_hours is not None else None,
        }


@dataclass(frozen=True)
class MonthlySummary:
    """Read-model: attendance aggregates for one calendar month."""

    employee_id: int
    month: int
    year: int
    working_days: int
    absent_days: int
    total_hours: Decimal
    average_hours: Decimal
    max_hours: Decimal
    min_hours: Decimal
    missing_checkout_days: int

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "month": self.month,
            "year": self.year,
            "working_days": self.working_days,
            "absent_days": self.absent_days,
            "total_hours": float(self.total_hours),
            "average_hours": float(self.average_hours),
            "max_hours": float(self.max_hours),
            "min_hours": float(self.min_hours),
            "missing_checkout_days": self.missing_checkout_days,
        }
