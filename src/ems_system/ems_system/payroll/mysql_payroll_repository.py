from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import PayrollComputation, PayrollRecord
from .repository import PayrollRepository

_PAYROLL_COLUMNS = """
    id, employee_id, month, year, base_salary, total_hours, per_hour_rate,
    earnings, deductions, net_salary, generated_at
"""


def _to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        base_salary=Decimal(r["base_salary"]),
        total_hours=Decimal(r["total_hours"]),
        per_hour_rate=Decimal(r["per_hour_rate"]),
        earnings=Decimal(r["earnings"]),
        deductions=Decimal(r["deductions"]),
        net_salary=Decimal(r["net_salary"]),
        generated_at=r.get("generated_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def exists_for_period(self, employee_id: int, *, month: int, year: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id FROM payroll WHERE employee_id=%s AND month=%s AND year=%s",
                (int(employee_id), int(month), int(year)),
            )
            return fetchone(cur) is not None

    def insert_record(
        self,
        *,
        employee_id: int,
        month: int,
        year: int,
        computation: PayrollComputation,
    ) -> Optional[int]:
        try:
            # uq_payroll_period arbitrates concurrent generations; the loser gets ER_DUP_ENTRY.
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO payroll(
                        employee_id, month, year, base_salary, total_hours, per_hour_rate,
                        earnings, deductions, net_salary
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(employee_id),
                        int(month),
                        int(year),
                        computation.base_salary,
                        computation.total_hours,
                        computation.per_hour_rate,
                        computation.earnings,
                        computation.deductions,
                        computation.net_salary,
                    ),
                )
                return int(cur.lastrowid)
        except IntegrityError as exc:
            if is_duplicate_key(exc):
                return None
            raise

    def list_for_employee(self, employee_id: int) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_PAYROLL_COLUMNS} FROM payroll WHERE employee_id=%s ORDER BY generated_at DESC, id DESC",
                (int(employee_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_PAYROLL_COLUMNS} FROM payroll ORDER BY generated_at DESC, id DESC")
            return [_to_record(r) for r in fetchall(cur)]
