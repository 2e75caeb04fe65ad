from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import ApprovalResult, LeaveBalance, LeaveRequest


class LeaveRepository(Protocol):
    def get(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def find_overlapping(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        """Non-rejected requests of the employee intersecting [start_date, end_date]."""

        raise NotImplementedError

    def insert_if_no_overlap(
        self,
        *,
        employee_id: int,
        leave_type_id: int,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> Optional[int]:
        """Insert a pending request unless an overlap appears; None when it does.

        The overlap re-check and the insert are serialized per employee.
        """

        raise NotImplementedError

    def approve_with_balance(self, leave_id: int, *, days: int) -> ApprovalResult:
        """Atomically move a pending request to approved and consume ``days`` of balance."""

        raise NotImplementedError

    def mark_rejected(self, leave_id: int) -> bool:
        """Only succeeds while the request is still pending."""

        raise NotImplementedError

    def list_balances(self, employee_id: int) -> Sequence[LeaveBalance]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
    ) -> Sequence[LeaveRequest]:
        """Newest applied first."""

        raise NotImplementedError

    def count_approved_starting_in(self, employee_id: int, *, month: int, year: int) -> int:
        raise NotImplementedError
