from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.constants import DEFAULT_HOURS_PER_DAY, DEFAULT_WORKING_DAYS_PER_MONTH


@dataclass(frozen=True)
class PayrollPolicy:
    """Fixed month model: 26 working days of 8 hours unless configured otherwise."""

    working_days_per_month: int = DEFAULT_WORKING_DAYS_PER_MONTH
    hours_per_day: int = DEFAULT_HOURS_PER_DAY

    @property
    def hours_per_month(self) -> int:
        return self.working_days_per_month * self.hours_per_day


@dataclass(frozen=True)
class PayrollComputation:
    base_salary: Decimal
    total_hours: Decimal
    per_hour_rate: Decimal
    earnings: Decimal
    unpaid_days: int
    per_day_salary: Decimal
    deductions: Decimal
    net_salary: Decimal


@dataclass(frozen=True)
class PayrollRecord:
    """Immutable ledger entry, unique per (employee_id, month, year)."""

    payroll_id: int
    employee_id: int
    month: int
    year: int
    base_salary: Decimal
    total_hours: Decimal
    per_hour_rate: Decimal
    earnings: Decimal
    deductions: Decimal
    net_salary: Decimal
    generated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "payroll_id": self.payroll_id,
            "employee_id": self.employee_id,
            "month": self.month,
            "year": self.year,
            "base_salary": float(self.base_salary),
            "total_hours": float(self.total_hours),
            "per_hour_rate": float(self.per_hour_rate),
            "earnings": float(self.earnings),
            "deductions": float(self.deductions),
            "net_salary": float(self.net_salary),
            "generated_at": self.generated_at.isoformat() if self.generated_at else None,
        }


@dataclass(frozen=True)
class GeneratedPayroll:
    employee_id: int
    payroll_id: int
    net_salary: Decimal

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "payroll_id": self.payroll_id,
            "net_salary": float(self.net_salary),
        }


@dataclass(frozen=True)
class PayrollFailure:
    employee_id: int
    kind: str
    reason: str

    def to_dict(self) -> dict:
        return {"employee_id": self.employee_id, "kind": self.kind, "reason": self.reason}


@dataclass
class PayrollBatchResult:
    month: int
    year: int
    generated: list[GeneratedPayroll] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)
    failed: list[PayrollFailure] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "year": self.year,
            "generated": [g.to_dict() for g in self.generated],
            "skipped": list(self.skipped),
            "failed": [f.to_dict() for f in self.failed],
        }
