"""In-memory implementations of the repository protocols used across tests.

Each guarded write runs under a lock so concurrent callers observe the same
check-then-act atomicity the MySQL repositories get from their transactions.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

from src.ems_system.ems_system.attendance.model import AttendanceRecord
from src.ems_system.ems_system.core.enums import LeaveStatus
from src.ems_system.ems_system.employees.model import Employee, LeaveType, NewEmployee
from src.ems_system.ems_system.leaves.model import ApprovalOutcome, ApprovalResult, LeaveBalance, LeaveRequest
from src.ems_system.ems_system.payroll.model import PayrollComputation, PayrollRecord


class InMemoryEmployees:
    def __init__(self, employees=(), leave_types=()):
        self._lock = threading.Lock()
        self.employees: dict[int, Employee] = {e.employee_id: e for e in employees}
        self.leave_types: dict[int, LeaveType] = {t.leave_type_id: t for t in leave_types}
        self.balances_seeded: list[tuple[int, int, int]] = []
        self.balance_sink: Optional["InMemoryLeaves"] = None

    def get_by_id(self, employee_id):
        return self.employees.get(int(employee_id))

    def get_active_by_user(self, user_id):
        for e in self.employees.values():
            if e.user_id == int(user_id) and e.is_active:
                return e
        return None

    def list_active(self):
        return [e for _, e in sorted(self.employees.items()) if e.is_active]

    def list_leave_types(self):
        return [t for _, t in sorted(self.leave_types.items())]

    def get_leave_type(self, leave_type_id):
        return self.leave_types.get(int(leave_type_id))

    def create_with_balances(self, new: NewEmployee, *, leave_types):
        with self._lock:
            if any(e.user_id == new.user_id for e in self.employees.values()):
                return None
            employee_id = max(self.employees, default=0) + 1
            self.employees[employee_id] = Employee(
                employee_id=employee_id,
                user_id=new.user_id,
                base_salary=new.base_salary,
                department_id=new.department_id,
                designation=new.designation,
                date_of_joining=new.date_of_joining,
            )
            for lt in leave_types:
                self.balances_seeded.append((employee_id, lt.leave_type_id, lt.default_days))
                if self.balance_sink is not None:
                    self.balance_sink.add_balance(employee_id, lt.leave_type_id, total_days=lt.default_days)
            return employee_id

    def deactivate(self, employee_id):
        e = self.employees.get(int(employee_id))
        if not e or not e.is_active:
            return False
        self.employees[e.employee_id] = replace(e, is_active=False)
        return True


class InMemoryAttendance:
    def __init__(self):
        self._lock = threading.Lock()
        self._by_employee_date: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0

    def add(self, employee_id: int, check_in: datetime, check_out: Optional[datetime] = None, total_hours=None):
        self._id += 1
        rec = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            work_date=check_in.date(),
            check_in=check_in,
            check_out=check_out,
            total_hours=Decimal(str(total_hours)) if total_hours is not None else None,
        )
        self._by_employee_date[(employee_id, rec.work_date)] = rec
        return rec

    def all(self):
        return list(self._by_employee_date.values())

    def get_for_employee_and_date(self, employee_id, work_date):
        return self._by_employee_date.get((employee_id, work_date))

    def list_for_employee(self, employee_id, *, month=None, year=None):
        items = [r for r in self._by_employee_date.values() if r.employee_id == employee_id]
        if month is not None and year is not None:
            items = [r for r in items if r.work_date.month == month and r.work_date.year == year]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items

    def create_checkin(self, *, employee_id, work_date, check_in):
        with self._lock:
            if (employee_id, work_date) in self._by_employee_date:
                return None
            self._id += 1
            self._by_employee_date[(employee_id, work_date)] = AttendanceRecord(
                attendance_id=self._id,
                employee_id=employee_id,
                work_date=work_date,
                check_in=check_in,
            )
            return self._id

    def update_checkout(self, *, attendance_id, check_out, total_hours):
        with self._lock:
            for key, rec in self._by_employee_date.items():
                if rec.attendance_id == attendance_id:
                    if rec.check_out is not None:
                        return False
                    self._by_employee_date[key] = replace(rec, check_out=check_out, total_hours=total_hours)
                    return True
            return False

    def total_hours_for_month(self, employee_id, *, month, year):
        return sum(
            (r.total_hours or Decimal("0") for r in self.list_for_employee(employee_id, month=month, year=year)),
            Decimal("0"),
        )


class InMemoryLeaves:
    def __init__(self):
        self._lock = threading.Lock()
        self.requests: dict[int, LeaveRequest] = {}
        self.balances: dict[tuple[int, int], LeaveBalance] = {}
        self._id = 0
        self._clock = datetime(2024, 1, 1, 9, 0)

    def add_balance(self, employee_id, leave_type_id, *, total_days, used_days=0):
        self.balances[(employee_id, leave_type_id)] = LeaveBalance(
            employee_id=employee_id,
            leave_type_id=leave_type_id,
            total_days=total_days,
            used_days=used_days,
        )

    def add_request(self, employee_id, leave_type_id, start_date, end_date, status=LeaveStatus.PENDING):
        self._id += 1
        self._clock += timedelta(minutes=1)
        self.requests[self._id] = LeaveRequest(
            leave_id=self._id,
            employee_id=employee_id,
            leave_type_id=leave_type_id,
            start_date=start_date,
            end_date=end_date,
            reason=None,
            status=status,
            applied_at=self._clock,
        )
        return self._id

    def _overlapping(self, employee_id, start_date, end_date):
        return [
            r
            for r in self.requests.values()
            if r.employee_id == employee_id
            and r.status != LeaveStatus.REJECTED
            and r.start_date <= end_date
            and r.end_date >= start_date
        ]

    def get(self, leave_id):
        return self.requests.get(int(leave_id))

    def find_overlapping(self, employee_id, *, start_date, end_date):
        return self._overlapping(employee_id, start_date, end_date)

    def insert_if_no_overlap(self, *, employee_id, leave_type_id, start_date, end_date, reason):
        with self._lock:
            if self._overlapping(employee_id, start_date, end_date):
                return None
            leave_id = self.add_request(employee_id, leave_type_id, start_date, end_date)
            self.requests[leave_id] = replace(self.requests[leave_id], reason=reason)
            return leave_id

    def approve_with_balance(self, leave_id, *, days):
        with self._lock:
            req = self.requests.get(int(leave_id))
            if not req:
                return ApprovalResult(ApprovalOutcome.NOT_FOUND)
            if req.status != LeaveStatus.PENDING:
                return ApprovalResult(ApprovalOutcome.NOT_PENDING)
            balance = self.balances.get((req.employee_id, req.leave_type_id))
            if not balance:
                return ApprovalResult(ApprovalOutcome.BALANCE_MISSING)
            if balance.used_days + days > balance.total_days:
                return ApprovalResult(ApprovalOutcome.INSUFFICIENT_BALANCE, balance)
            updated = replace(balance, used_days=balance.used_days + days)
            self.balances[(req.employee_id, req.leave_type_id)] = updated
            self.requests[req.leave_id] = replace(req, status=LeaveStatus.APPROVED)
            return ApprovalResult(ApprovalOutcome.APPROVED, updated)

    def mark_rejected(self, leave_id):
        with self._lock:
            req = self.requests.get(int(leave_id))
            if not req or req.status != LeaveStatus.PENDING:
                return False
            self.requests[req.leave_id] = replace(req, status=LeaveStatus.REJECTED)
            return True

    def list_balances(self, employee_id):
        return [b for (eid, _), b in sorted(self.balances.items()) if eid == employee_id]

    def list_requests(self, *, employee_id=None, status=None):
        items = [
            r
            for r in self.requests.values()
            if (employee_id is None or r.employee_id == employee_id) and (status is None or r.status == status)
        ]
        items.sort(key=lambda r: (r.applied_at, r.leave_id), reverse=True)
        return items

    def count_approved_starting_in(self, employee_id, *, month, year):
        return sum(
            1
            for r in self.requests.values()
            if r.employee_id == employee_id
            and r.status == LeaveStatus.APPROVED
            and r.start_date.month == month
            and r.start_date.year == year
        )


class InMemoryPayroll:
    def __init__(self):
        self._lock = threading.Lock()
        self.records: dict[tuple[int, int, int], PayrollRecord] = {}
        self._id = 0
        self._clock = datetime(2024, 4, 1, 8, 0)

    def exists_for_period(self, employee_id, *, month, year):
        return (employee_id, month, year) in self.records

    def insert_record(self, *, employee_id, month, year, computation: PayrollComputation):
        with self._lock:
            if (employee_id, month, year) in self.records:
                return None
            self._id += 1
            self._clock += timedelta(minutes=1)
            self.records[(employee_id, month, year)] = PayrollRecord(
                payroll_id=self._id,
                employee_id=employee_id,
                month=month,
                year=year,
                base_salary=computation.base_salary,
                total_hours=computation.total_hours,
                per_hour_rate=computation.per_hour_rate,
                earnings=computation.earnings,
                deductions=computation.deductions,
                net_salary=computation.net_salary,
                generated_at=self._clock,
            )
            return self._id

    def list_for_employee(self, employee_id):
        return [r for r in self.list_all() if r.employee_id == employee_id]

    def list_all(self):
        return sorted(self.records.values(), key=lambda r: (r.generated_at, r.payroll_id), reverse=True)
