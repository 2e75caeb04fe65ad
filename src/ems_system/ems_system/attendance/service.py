from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import days_in_month, elapsed_hours, now_local
from ..common.validators import require_month, require_year
from ..core.constants import HOURS_QUANTUM
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import AttendanceRecord, AttendanceStatusView, MonthlySummary
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _round_hours(value: Decimal) -> Decimal:
    return value.quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


class AttendanceLedger:
    """Daily check-in/check-out ledger.

    At most one record exists per (employee, date); the record is created by check-in
    and completed exactly once by check-out.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def check_in(self, employee_id: int, *, now: datetime | None = None) -> int:
        now = now or now_local()
        today = now.date()

        if self._attendance.get_for_employee_and_date(employee_id, today):
            raise ConflictError("Already checked in today")

        attendance_id = self._attendance.create_checkin(employee_id=employee_id, work_date=today, check_in=now)
        if attendance_id is None:
            # Lost the race against a concurrent check-in for the same day.
            raise ConflictError("Already checked in today")

        logger.info("Employee %s checked in at %s", employee_id, now.isoformat())
        return attendance_id

    def check_out(self, employee_id: int, *, now: datetime | None = None) -> Decimal:
        now = now or now_local()
        today = now.date()

        record = self._attendance.get_for_employee_and_date(employee_id, today)
        if not record:
            raise NotFoundError("You have not checked in today")
        if record.check_out is not None:
            raise ConflictError("You have already checked out today")
        if now < record.check_in:
            raise ValidationError("Check-out time cannot be before check-in time")

        total_hours = elapsed_hours(record.check_in, now)
        updated = self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out=now,
            total_hours=total_hours,
        )
        if not updated:
            raise ConflictError("You have already checked out today")

        logger.info("Employee %s checked out at %s (%s h)", employee_id, now.isoformat(), total_hours)
        return total_hours

    def status(self, employee_id: int, *, today: date | None = None) -> AttendanceStatusView:
        today = today or now_local().date()
        record = self._attendance.get_for_employee_and_date(employee_id, today)
        if not record:
            return AttendanceStatusView(checked_in=False, checked_out=False)

        return AttendanceStatusView(
            checked_in=True,
            checked_out=record.is_checked_out,
            check_in=record.check_in,
            check_out=record.check_out,
            total_hours=record.total_hours,
        )

    def history(
        self,
        employee_id: int,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        if (month is None) != (year is None):
            raise ValidationError("month and year must be given together")
        if month is not None:
            month, year = require_month(month), require_year(year)
        return self._attendance.list_for_employee(employee_id, month=month, year=year)

    def total_hours_for_month(self, employee_id: int, *, month: int, year: int) -> Decimal:
        return self._attendance.total_hours_for_month(employee_id, month=month, year=year)

    def monthly_summary(self, employee_id: int, *, month: int, year: int) -> MonthlySummary:
        month, year = require_month(month), require_year(year)
        records = self._attendance.list_for_employee(employee_id, month=month, year=year)

        hours = [r.total_hours if r.total_hours is not None else Decimal("0") for r in records]
        working_days = len(records)
        total = sum(hours, Decimal("0"))

        return MonthlySummary(
            employee_id=employee_id,
            month=month,
            year=year,
            working_days=working_days,
            absent_days=days_in_month(month, year) - working_days,
            total_hours=_round_hours(total),
            average_hours=_round_hours(total / working_days) if working_days else Decimal("0.00"),
            max_hours=_round_hours(max(hours)) if hours else Decimal("0.00"),
            min_hours=_round_hours(min(hours)) if hours else Decimal("0.00"),
            missing_checkout_days=sum(1 for r in records if r.check_out is None),
        )
