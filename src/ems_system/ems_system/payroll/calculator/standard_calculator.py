from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ...core.constants import MONEY_QUANTUM, RATE_QUANTUM
from ..model import PayrollComputation, PayrollPolicy
from .base import PayrollCalculator


def _money(value: Decimal) -> Decimal:
    return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: paid by worked hours, minus one day's salary per unpaid leave.

    per_hour_rate = base / (working_days * hours_per_day)
    earnings      = per_hour_rate * total_hours
    deductions    = unpaid_days * base / working_days
    net_salary    = earnings - deductions

    Each money figure is rounded half-up to cents on its own, from unrounded inputs,
    so net_salary may differ by a cent from the rounded earnings minus rounded deductions.
    """

    def __init__(self, policy: Optional[PayrollPolicy] = None):
        self._policy = policy or PayrollPolicy()

    def compute(self, *, base_salary: Decimal, total_hours: Decimal, unpaid_days: int) -> PayrollComputation:
        base_salary = Decimal(base_salary)
        total_hours = Decimal(total_hours)

        per_hour_rate = base_salary / Decimal(self._policy.hours_per_month)
        per_day_salary = base_salary / Decimal(self._policy.working_days_per_month)

        raw_earnings = per_hour_rate * total_hours
        raw_deductions = per_day_salary * int(unpaid_days)

        return PayrollComputation(
            base_salary=_money(base_salary),
            total_hours=_money(total_hours),
            per_hour_rate=per_hour_rate.quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP),
            earnings=_money(raw_earnings),
            unpaid_days=int(unpaid_days),
            per_day_salary=_money(per_day_salary),
            deductions=_money(raw_deductions),
            net_salary=_money(raw_earnings - raw_deductions),
        )
