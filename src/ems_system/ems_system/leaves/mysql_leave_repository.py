from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import month_bounds
from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ApprovalOutcome, ApprovalResult, LeaveBalance, LeaveRequest
from .repository import LeaveRepository


def _to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        leave_type_id=int(r["leave_type_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r.get("reason"),
        status=LeaveStatus(r["status"]),
        applied_at=r["applied_at"],
        leave_type=r.get("leave_type"),
    )


def _to_balance(r: dict) -> LeaveBalance:
    return LeaveBalance(
        employee_id=int(r["employee_id"]),
        leave_type_id=int(r["leave_type_id"]),
        total_days=int(r["total_days"]),
        used_days=int(r["used_days"]),
        leave_type=r.get("leave_type"),
    )


_OVERLAP_SQL = """
    SELECT l.id, l.employee_id, l.leave_type_id, l.start_date, l.end_date,
           l.reason, l.status, l.applied_at
    FROM leaves l
    WHERE l.employee_id=%s
      AND l.status <> %s
      AND l.start_date <= %s
      AND l.end_date >= %s
    ORDER BY l.start_date ASC
"""


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT l.id, l.employee_id, l.leave_type_id, l.start_date, l.end_date,
                       l.reason, l.status, l.applied_at, lt.name AS leave_type
                FROM leaves l
                LEFT JOIN leave_types lt ON lt.id = l.leave_type_id
                WHERE l.id=%s
                """,
                (int(leave_id),),
            )
            r = fetchone(cur)
            return _to_request(r) if r else None

    def find_overlapping(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _OVERLAP_SQL,
                (int(employee_id), LeaveStatus.REJECTED.value, end_date, start_date),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def insert_if_no_overlap(
        self,
        *,
        employee_id: int,
        leave_type_id: int,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            # Serialize concurrent applications of the same employee on the employee row.
            cur.execute("SELECT id FROM employees WHERE id=%s FOR UPDATE", (int(employee_id),))
            fetchall(cur)

            cur.execute(
                _OVERLAP_SQL,
                (int(employee_id), LeaveStatus.REJECTED.value, end_date, start_date),
            )
            if fetchall(cur):
                return None

            cur.execute(
                """
                INSERT INTO leaves(employee_id, leave_type_id, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    int(leave_type_id),
                    start_date,
                    end_date,
                    reason,
                    LeaveStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def approve_with_balance(self, leave_id: int, *, days: int) -> ApprovalResult:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, employee_id, leave_type_id, status FROM leaves WHERE id=%s FOR UPDATE",
                (int(leave_id),),
            )
            req = fetchone(cur)
            if not req:
                return ApprovalResult(ApprovalOutcome.NOT_FOUND)
            if req["status"] != LeaveStatus.PENDING.value:
                return ApprovalResult(ApprovalOutcome.NOT_PENDING)

            cur.execute(
                """
                SELECT employee_id, leave_type_id, total_days, used_days
                FROM leave_balance
                WHERE employee_id=%s AND leave_type_id=%s
                FOR UPDATE
                """,
                (int(req["employee_id"]), int(req["leave_type_id"])),
            )
            row = fetchone(cur)
            if not row:
                return ApprovalResult(ApprovalOutcome.BALANCE_MISSING)

            balance = _to_balance(row)
            if balance.used_days + int(days) > balance.total_days:
                return ApprovalResult(ApprovalOutcome.INSUFFICIENT_BALANCE, balance)

            cur.execute(
                "UPDATE leaves SET status=%s WHERE id=%s",
                (LeaveStatus.APPROVED.value, int(leave_id)),
            )
            cur.execute(
                """
                UPDATE leave_balance
                SET used_days = used_days + %s
                WHERE employee_id=%s AND leave_type_id=%s
                """,
                (int(days), balance.employee_id, balance.leave_type_id),
            )
            return ApprovalResult(
                ApprovalOutcome.APPROVED,
                LeaveBalance(
                    employee_id=balance.employee_id,
                    leave_type_id=balance.leave_type_id,
                    total_days=balance.total_days,
                    used_days=balance.used_days + int(days),
                ),
            )

    def mark_rejected(self, leave_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE leaves SET status=%s WHERE id=%s AND status=%s",
                (LeaveStatus.REJECTED.value, int(leave_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def list_balances(self, employee_id: int) -> Sequence[LeaveBalance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT lb.employee_id, lb.leave_type_id, lt.name AS leave_type,
                       lb.total_days, lb.used_days
                FROM leave_balance lb
                JOIN leave_types lt ON lt.id = lb.leave_type_id
                WHERE lb.employee_id=%s
                ORDER BY lb.leave_type_id ASC
                """,
                (int(employee_id),),
            )
            return [_to_balance(r) for r in fetchall(cur)]

    def list_requests(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
    ) -> Sequence[LeaveRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if employee_id is not None:
            clauses.append("l.employee_id=%s")
            params.append(int(employee_id))
        if status is not None:
            clauses.append("l.status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT l.id, l.employee_id, l.leave_type_id, l.start_date, l.end_date,
                       l.reason, l.status, l.applied_at, lt.name AS leave_type
                FROM leaves l
                JOIN leave_types lt ON lt.id = l.leave_type_id
                WHERE {where}
                ORDER BY l.applied_at DESC, l.id DESC
                """,
                tuple(params),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def count_approved_starting_in(self, employee_id: int, *, month: int, year: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS unpaid
                FROM leaves
                WHERE employee_id=%s
                  AND status=%s
                  AND start_date BETWEEN %s AND %s
                """,
                (int(employee_id), LeaveStatus.APPROVED.value, *month_bounds(month, year)),
            )
            r = fetchone(cur)
            return int(r["unpaid"]) if r else 0
