from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Employee, LeaveType, NewEmployee
from .repository import EmployeeRepository

_EMPLOYEE_COLUMNS = "id, user_id, base_salary, is_active, department_id, designation, date_of_joining"


def _to_employee(r: dict) -> Employee:
    salary = r.get("base_salary")
    return Employee(
        employee_id=int(r["id"]),
        user_id=int(r["user_id"]),
        base_salary=Decimal(salary) if salary is not None else None,
        is_active=bool(r.get("is_active", True)),
        department_id=r.get("department_id"),
        designation=r.get("designation"),
        date_of_joining=r.get("date_of_joining"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def get_active_by_user(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE user_id=%s AND is_active=1",
                (int(user_id),),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE is_active=1 ORDER BY id ASC")
            return [_to_employee(r) for r in fetchall(cur)]

    def list_leave_types(self) -> Sequence[LeaveType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, default_days FROM leave_types ORDER BY id ASC")
            return [
                LeaveType(leave_type_id=int(r["id"]), name=r["name"], default_days=int(r["default_days"]))
                for r in fetchall(cur)
            ]

    def get_leave_type(self, leave_type_id: int) -> Optional[LeaveType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, default_days FROM leave_types WHERE id=%s", (int(leave_type_id),))
            r = fetchone(cur)
            if not r:
                return None
            return LeaveType(leave_type_id=int(r["id"]), name=r["name"], default_days=int(r["default_days"]))

    def create_with_balances(self, new: NewEmployee, *, leave_types: Sequence[LeaveType]) -> Optional[int]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(user_id, department_id, designation, base_salary, date_of_joining, is_active)
                    VALUES(%s,%s,%s,%s,%s,1)
                    """,
                    (
                        int(new.user_id),
                        new.department_id,
                        new.designation,
                        new.base_salary,
                        new.date_of_joining,
                    ),
                )
                employee_id = int(cur.lastrowid)
                if leave_types:
                    cur.executemany(
                        """
                        INSERT INTO leave_balance(employee_id, leave_type_id, total_days, used_days)
                        VALUES(%s,%s,%s,0)
                        """,
                        [(employee_id, lt.leave_type_id, int(lt.default_days)) for lt in leave_types],
                    )
                return employee_id
        except IntegrityError as exc:
            if is_duplicate_key(exc):
                return None
            raise

    def deactivate(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET is_active=0 WHERE id=%s AND is_active=1", (int(employee_id),))
            return cur.rowcount > 0
