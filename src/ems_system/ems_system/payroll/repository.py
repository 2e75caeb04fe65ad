from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PayrollComputation, PayrollRecord


class PayrollRepository(Protocol):
    def exists_for_period(self, employee_id: int, *, month: int, year: int) -> bool:
        raise NotImplementedError

    def insert_record(
        self,
        *,
        employee_id: int,
        month: int,
        year: int,
        computation: PayrollComputation,
    ) -> Optional[int]:
        """Returns None if a record for (employee_id, month, year) already exists."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[PayrollRecord]:
        """Newest generated first."""

        raise NotImplementedError

    def list_all(self) -> Sequence[PayrollRecord]:
        raise NotImplementedError
