from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(
        self,
        employee_id: int,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        """Newest first."""

        raise NotImplementedError

    def create_checkin(self, *, employee_id: int, work_date: date, check_in: datetime) -> Optional[int]:
        """Returns None if a record already exists for (employee_id, work_date)."""

        raise NotImplementedError

    def update_checkout(self, *, attendance_id: int, check_out: datetime, total_hours: Decimal) -> bool:
        """Only succeeds while check_out is still unset."""

        raise NotImplementedError

    def total_hours_for_month(self, employee_id: int, *, month: int, year: int) -> Decimal:
        raise NotImplementedError
