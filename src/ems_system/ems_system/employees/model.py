from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: employee profile linked to an authenticated principal (user)."""

    employee_id: int
    user_id: int
    base_salary: Optional[Decimal]
    is_active: bool = True
    department_id: Optional[int] = None
    designation: Optional[str] = None
    date_of_joining: Optional[date] = None


@dataclass(frozen=True)
class LeaveType:
    """Catalog entry. Seeded once, never mutated."""

    leave_type_id: int
    name: str
    default_days: int


@dataclass(frozen=True)
class NewEmployee:
    user_id: int
    base_salary: Decimal
    department_id: Optional[int] = None
    designation: Optional[str] = None
    date_of_joining: Optional[date] = None
