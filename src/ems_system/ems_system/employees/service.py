from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

from ..common.validators import optional_text, require_non_negative_amount, require_positive_int
from ..core.actor import Actor
from ..core.exceptions import ConflictError, NotFoundError
from .model import Employee, LeaveType, NewEmployee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeDirectory:
    """Resolves principals to active employees and supplies the leave-type catalog."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def resolve_active_employee(self, principal_id: int) -> Employee:
        employee = self._employees.get_active_by_user(int(principal_id))
        if not employee:
            raise NotFoundError("No employee profile found for this user")
        return employee

    def get_active_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or not employee.is_active:
            raise NotFoundError("Employee not found or inactive")
        return employee

    def list_active(self) -> Sequence[Employee]:
        return self._employees.list_active()

    def list_leave_types(self) -> Sequence[LeaveType]:
        return self._employees.list_leave_types()

    def get_leave_type(self, leave_type_id: int) -> Optional[LeaveType]:
        return self._employees.get_leave_type(int(leave_type_id))

    def onboard(
        self,
        actor: Actor,
        *,
        user_id: Any,
        base_salary: Any,
        department_id: Optional[int] = None,
        designation: Optional[str] = None,
        date_of_joining: Optional[date] = None,
    ) -> int:
        """Create an employee profile and seed one leave balance per leave type."""

        actor.require_admin()
        if department_id is not None:
            department_id = require_positive_int(department_id, "department_id")
        new = NewEmployee(
            user_id=require_positive_int(user_id, "user_id"),
            base_salary=require_non_negative_amount(base_salary, "base_salary"),
            department_id=department_id,
            designation=optional_text(designation, "designation"),
            date_of_joining=date_of_joining,
        )

        leave_types = self._employees.list_leave_types()
        employee_id = self._employees.create_with_balances(new, leave_types=leave_types)
        if employee_id is None:
            raise ConflictError("Employee profile already exists for this user")

        logger.info(
            "Onboarded employee %s (user %s) with %d leave balances",
            employee_id,
            new.user_id,
            len(leave_types),
        )
        return employee_id

    def deactivate(self, actor: Actor, employee_id: int) -> None:
        actor.require_admin()
        if not self._employees.deactivate(int(employee_id)):
            raise NotFoundError("Employee not found or already inactive")
        logger.info("Deactivated employee %s", employee_id)
