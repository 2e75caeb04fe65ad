from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import inclusive_days
from ..common.validators import optional_text, require_date, require_positive_int
from ..core.actor import Actor
from ..core.enums import LeaveStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import ApprovalOutcome, LeaveBalance, LeaveDecision, LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

_DECISIONS = {LeaveStatus.APPROVED, LeaveStatus.REJECTED}


def _parse_status(value: Any) -> Optional[LeaveStatus]:
    if isinstance(value, LeaveStatus):
        return value
    try:
        return LeaveStatus(str(value or "").strip().lower())
    except ValueError:
        return None


def _parse_decision(value: Any) -> LeaveStatus:
    decision = _parse_status(value)
    if decision not in _DECISIONS:
        raise ValidationError("status must be 'approved' or 'rejected'")
    return decision


class LeaveLedger:
    """Leave requests and the balances they draw from.

    Request lifecycle: pending -> approved (consumes balance) | pending -> rejected.
    Both outcomes are terminal.
    """

    def __init__(
        self,
        leaves: LeaveRepository,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
    ):
        self._leaves = leaves
        self._attendance = attendance
        self._employees = employees

    def apply_leave(
        self,
        employee_id: int,
        *,
        leave_type_id: Any,
        start_date: Any,
        end_date: Any,
        reason: Optional[str] = None,
    ) -> int:
        leave_type_id = require_positive_int(leave_type_id, "leave_type_id")
        start = require_date(start_date, "start_date")
        end = require_date(end_date, "end_date")
        reason = optional_text(reason, "reason")
        if start > end:
            raise ValidationError("start_date cannot be after end_date")

        if not self._employees.get_leave_type(leave_type_id):
            raise NotFoundError("Invalid leave_type_id")

        overlapping = self._leaves.find_overlapping(employee_id, start_date=start, end_date=end)
        if overlapping:
            raise ConflictError(
                "Overlapping leave exists",
                details={"overlapping_leave_id": overlapping[0].leave_id},
            )

        if self._attendance.get_for_employee_and_date(employee_id, start):
            raise ConflictError("Cannot apply leave on a day you were present")

        leave_id = self._leaves.insert_if_no_overlap(
            employee_id=employee_id,
            leave_type_id=leave_type_id,
            start_date=start,
            end_date=end,
            reason=reason,
        )
        if leave_id is None:
            raise ConflictError("Overlapping leave exists")

        logger.info(
            "Employee %s applied for leave %s (%s..%s, type %s)",
            employee_id,
            leave_id,
            start.isoformat(),
            end.isoformat(),
            leave_type_id,
        )
        return leave_id

    def decide(self, actor: Actor, leave_id: int, decision: Any) -> LeaveDecision:
        actor.require_admin()
        status = _parse_decision(decision)

        request = self._leaves.get(int(leave_id))
        if not request:
            raise NotFoundError("Leave not found")
        if request.status.is_terminal:
            raise ConflictError(f"Leave request is already {request.status.value}")

        if status == LeaveStatus.REJECTED:
            return self._reject(request)
        return self._approve(request)

    def reject(self, actor: Actor, leave_id: int) -> LeaveDecision:
        return self.decide(actor, leave_id, LeaveStatus.REJECTED)

    def _reject(self, request: LeaveRequest) -> LeaveDecision:
        if not self._leaves.mark_rejected(request.leave_id):
            raise ConflictError("Leave request is no longer pending")
        logger.info("Leave %s of employee %s rejected", request.leave_id, request.employee_id)
        return LeaveDecision(leave_id=request.leave_id, status=LeaveStatus.REJECTED)

    def _approve(self, request: LeaveRequest) -> LeaveDecision:
        days = inclusive_days(request.start_date, request.end_date)
        result = self._leaves.approve_with_balance(request.leave_id, days=days)

        if result.outcome == ApprovalOutcome.NOT_FOUND:
            raise NotFoundError("Leave not found")
        if result.outcome == ApprovalOutcome.NOT_PENDING:
            raise ConflictError("Leave request is no longer pending")
        if result.outcome == ApprovalOutcome.BALANCE_MISSING:
            raise NotFoundError("Leave balance entry missing for this employee")
        if result.outcome == ApprovalOutcome.INSUFFICIENT_BALANCE:
            remaining = result.balance.remaining if result.balance else 0
            logger.warning(
                "Leave %s needs %d days but employee %s has %d remaining",
                request.leave_id,
                days,
                request.employee_id,
                remaining,
            )
            raise ConflictError("Insufficient leave balance", details={"remaining": remaining})

        logger.info(
            "Leave %s of employee %s approved (%d days)",
            request.leave_id,
            request.employee_id,
            days,
        )
        return LeaveDecision(leave_id=request.leave_id, status=LeaveStatus.APPROVED, days_used=days)

    def balance(self, employee_id: int) -> Sequence[LeaveBalance]:
        return self._leaves.list_balances(employee_id)

    def list_leaves(
        self,
        actor: Actor,
        *,
        employee_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> Sequence[LeaveRequest]:
        """Employees see their own requests; admins may list everyone's."""

        status_filter = None
        if status:
            status_filter = _parse_status(status)
            if status_filter is None:
                raise ValidationError("Unknown leave status")

        if employee_id is None:
            actor.require_admin()
        return self._leaves.list_requests(employee_id=employee_id, status=status_filter)

    def unpaid_leave_count(self, employee_id: int, *, month: int, year: int) -> int:
        """Approved requests whose start_date falls inside (month, year)."""

        return self._leaves.count_approved_starting_in(employee_id, month=month, year=year)
