from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..common.datetime_utils import month_bounds
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _to_record(r: dict) -> AttendanceRecord:
    hours = r.get("total_hours")
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["date"],
        check_in=r["check_in"],
        check_out=r.get("check_out"),
        total_hours=Decimal(hours) if hours is not None else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, employee_id, date, check_in, check_out, total_hours
                FROM attendance
                WHERE employee_id=%s AND date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_employee(
        self,
        employee_id: int,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["employee_id=%s"]
        params: list[object] = [int(employee_id)]

        if month is not None and year is not None:
            clauses.append("date BETWEEN %s AND %s")
            params.extend(month_bounds(month, year))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, employee_id, date, check_in, check_out, total_hours
                FROM attendance
                WHERE {where}
                ORDER BY date DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_checkin(self, *, employee_id: int, work_date: date, check_in: datetime) -> Optional[int]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(employee_id, date, check_in)
                    VALUES(%s,%s,%s)
                    """,
                    (int(employee_id), work_date, check_in),
                )
                return int(cur.lastrowid)
        except IntegrityError as exc:
            if is_duplicate_key(exc):
                return None
            raise

    def update_checkout(self, *, attendance_id: int, check_out: datetime, total_hours: Decimal) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_out=%s, total_hours=%s
                WHERE id=%s AND check_out IS NULL
                """,
                (check_out, total_hours, int(attendance_id)),
            )
            return cur.rowcount > 0

    def total_hours_for_month(self, employee_id: int, *, month: int, year: int) -> Decimal:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COALESCE(SUM(total_hours), 0) AS hours
                FROM attendance
                WHERE employee_id=%s AND date BETWEEN %s AND %s
                """,
                (int(employee_id), *month_bounds(month, year)),
            )
            r = fetchone(cur)
            return Decimal(r["hours"]) if r and r.get("hours") is not None else Decimal("0")
