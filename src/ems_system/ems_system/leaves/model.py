from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    employee_id: int
    leave_type_id: int
    start_date: date
    end_date: date
    reason: Optional[str]
    status: LeaveStatus
    applied_at: datetime
    leave_type: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "leave_id": self.leave_id,
            "employee_id": self.employee_id,
            "leave_type_id": self.leave_type_id,
            "leave_type": self.leave_type,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "reason": self.reason,
            "status": self.status.value,
            "applied_at": self.applied_at.isoformat(),
        }


@dataclass(frozen=True)
class LeaveBalance:
    """Per-employee, per-leave-type entitlement: 0 <= used_days <= total_days."""

    employee_id: int
    leave_type_id: int
    total_days: int
    used_days: int
    leave_type: Optional[str] = None

    @property
    def remaining(self) -> int:
        return self.total_days - self.used_days

    def to_dict(self) -> dict:
        return {
            "leave_type_id": self.leave_type_id,
            "leave_type": self.leave_type,
            "total_days": self.total_days,
            "used_days": self.used_days,
            "remaining": self.remaining,
        }


class ApprovalOutcome(str, Enum):
    APPROVED = "approved"
    NOT_FOUND = "not_found"
    NOT_PENDING = "not_pending"
    BALANCE_MISSING = "balance_missing"
    INSUFFICIENT_BALANCE = "insufficient_balance"


@dataclass(frozen=True)
class ApprovalResult:
    """What the atomic approve-and-consume step observed under lock."""

    outcome: ApprovalOutcome
    balance: Optional[LeaveBalance] = None


@dataclass(frozen=True)
class LeaveDecision:
    leave_id: int
    status: LeaveStatus
    days_used: Optional[int] = None

    def to_dict(self) -> dict:
        out = {"leave_id": self.leave_id, "status": self.status.value}
        if self.days_used is not None:
            out["days_used"] = self.days_used
        return out
