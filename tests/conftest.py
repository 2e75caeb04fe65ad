from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from src.ems_system.ems_system.container import wire
from src.ems_system.ems_system.core.actor import Actor
from src.ems_system.ems_system.core.enums import Role
from src.ems_system.ems_system.employees.model import Employee, LeaveType

from fakes import InMemoryAttendance, InMemoryEmployees, InMemoryLeaves, InMemoryPayroll

CASUAL = LeaveType(leave_type_id=1, name="Casual", default_days=12)
SICK = LeaveType(leave_type_id=2, name="Sick", default_days=10)


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 4, 9, 0, 0)


@pytest.fixture
def admin():
    return Actor(principal_id=1, role=Role.ADMIN)


@pytest.fixture
def employee_actor():
    return Actor(principal_id=2, role=Role.EMPLOYEE)


@pytest.fixture
def employees_repo():
    return InMemoryEmployees(
        employees=[
            Employee(employee_id=1, user_id=1, base_salary=Decimal("52000")),
            Employee(employee_id=2, user_id=2, base_salary=Decimal("26000")),
        ],
        leave_types=[CASUAL, SICK],
    )


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def leaves_repo():
    return InMemoryLeaves()


@pytest.fixture
def payroll_repo():
    return InMemoryPayroll()


@pytest.fixture
def container(employees_repo, attendance_repo, leaves_repo, payroll_repo):
    employees_repo.balance_sink = leaves_repo
    return wire(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        payroll_repo=payroll_repo,
    )
