from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee, LeaveType, NewEmployee


class EmployeeRepository(Protocol):
    """Repository interface for the employee directory.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_active_by_user(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Employee]:
        raise NotImplementedError

    def list_leave_types(self) -> Sequence[LeaveType]:
        raise NotImplementedError

    def get_leave_type(self, leave_type_id: int) -> Optional[LeaveType]:
        raise NotImplementedError

    def create_with_balances(self, new: NewEmployee, *, leave_types: Sequence[LeaveType]) -> Optional[int]:
        """Insert the employee and one balance row per leave type in one transaction.

        Returns None when the user already has an employee profile.
        """

        raise NotImplementedError

    def deactivate(self, employee_id: int) -> bool:
        raise NotImplementedError
