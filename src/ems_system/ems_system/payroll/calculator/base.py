from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ..model import PayrollComputation


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(self, *, base_salary: Decimal, total_hours: Decimal, unpaid_days: int) -> PayrollComputation:
        raise NotImplementedError
