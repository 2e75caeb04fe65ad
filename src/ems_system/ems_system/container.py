from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceLedger
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeDirectory
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveLedger
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.model import PayrollPolicy
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollEngine


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    payroll_repo: PayrollRepository

    directory: EmployeeDirectory
    attendance_ledger: AttendanceLedger
    leave_ledger: LeaveLedger
    payroll_engine: PayrollEngine


def wire(
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    payroll_repo: PayrollRepository,
    payroll_policy: Optional[PayrollPolicy] = None,
) -> Container:
    directory = EmployeeDirectory(employees_repo)
    attendance_ledger = AttendanceLedger(attendance_repo)
    leave_ledger = LeaveLedger(leaves_repo, attendance_repo, employees_repo)
    payroll_engine = PayrollEngine(
        payroll_repo,
        directory,
        attendance_ledger,
        leave_ledger,
        calculator=StandardPayrollCalculator(payroll_policy),
    )

    return Container(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        payroll_repo=payroll_repo,
        directory=directory,
        attendance_ledger=attendance_ledger,
        leave_ledger=leave_ledger,
        payroll_engine=payroll_engine,
    )


def build_container(*, db_config: dict, payroll_policy: Optional[PayrollPolicy] = None) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire(
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        payroll_policy=payroll_policy,
    )
