from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..attendance.service import AttendanceLedger
from ..common.validators import require_month, require_positive_int, require_year
from ..core.actor import Actor
from ..core.exceptions import ConflictError, DomainError, InternalError, NotFoundError
from ..employees.model import Employee
from ..employees.service import EmployeeDirectory
from ..leaves.service import LeaveLedger
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import GeneratedPayroll, PayrollBatchResult, PayrollFailure, PayrollRecord
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


class PayrollEngine:
    """Derives one immutable payroll record per employee per (month, year).

    Reads worked hours from the attendance ledger and approved leave from the leave
    ledger; regeneration of an existing period is rejected, never overwritten.
    """

    def __init__(
        self,
        payroll: PayrollRepository,
        directory: EmployeeDirectory,
        attendance: AttendanceLedger,
        leaves: LeaveLedger,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payroll = payroll
        self._directory = directory
        self._attendance = attendance
        self._leaves = leaves
        self._calculator = calculator or StandardPayrollCalculator()

    def generate_for_employee(self, actor: Actor, employee_id, month, year) -> GeneratedPayroll:
        actor.require_admin()
        return self._generate(
            require_positive_int(employee_id, "employee_id"),
            require_month(month),
            require_year(year),
        )

    def generate_for_all_active(self, actor: Actor, month, year) -> PayrollBatchResult:
        actor.require_admin()
        month, year = require_month(month), require_year(year)

        result = PayrollBatchResult(month=month, year=year)
        for employee in self._directory.list_active():
            employee_id = employee.employee_id
            if self._payroll.exists_for_period(employee_id, month=month, year=year):
                result.skipped.append(employee_id)
                continue

            try:
                result.generated.append(self._generate(employee_id, month, year, employee=employee))
            except ConflictError:
                # Generated concurrently between the check and the insert.
                result.skipped.append(employee_id)
            except DomainError as exc:
                logger.warning("Payroll for employee %s %02d/%d failed: %s", employee_id, month, year, exc)
                result.failed.append(PayrollFailure(employee_id=employee_id, kind=exc.kind, reason=exc.message))
            except Exception:
                logger.error("Payroll for employee %s %02d/%d failed", employee_id, month, year, exc_info=True)
                result.failed.append(
                    PayrollFailure(
                        employee_id=employee_id,
                        kind=InternalError.kind,
                        reason="Unexpected error while generating payroll",
                    )
                )

        logger.info(
            "Payroll batch %02d/%d: %d generated, %d skipped, %d failed",
            month,
            year,
            len(result.generated),
            len(result.skipped),
            len(result.failed),
        )
        return result

    def _generate(
        self,
        employee_id: int,
        month: int,
        year: int,
        *,
        employee: Optional[Employee] = None,
    ) -> GeneratedPayroll:
        if self._payroll.exists_for_period(employee_id, month=month, year=year):
            raise ConflictError("Payroll already generated for this employee for the selected month")

        employee = employee or self._directory.get_active_employee(employee_id)
        if employee.base_salary is None:
            raise NotFoundError("Base salary missing for this employee")

        computation = self._calculator.compute(
            base_salary=employee.base_salary,
            total_hours=self._attendance.total_hours_for_month(employee_id, month=month, year=year),
            unpaid_days=self._leaves.unpaid_leave_count(employee_id, month=month, year=year),
        )

        payroll_id = self._payroll.insert_record(
            employee_id=employee_id,
            month=month,
            year=year,
            computation=computation,
        )
        if payroll_id is None:
            raise ConflictError("Payroll already generated for this employee for the selected month")

        logger.info(
            "Payroll %s generated for employee %s %02d/%d: net %s",
            payroll_id,
            employee_id,
            month,
            year,
            computation.net_salary,
        )
        return GeneratedPayroll(employee_id=employee_id, payroll_id=payroll_id, net_salary=computation.net_salary)

    def history(self, employee_id: int) -> Sequence[PayrollRecord]:
        return self._payroll.list_for_employee(int(employee_id))

    def history_of(self, actor: Actor, employee_id) -> Sequence[PayrollRecord]:
        actor.require_admin()
        return self.history(require_positive_int(employee_id, "employee_id"))

    def all_records(self, actor: Actor) -> Sequence[PayrollRecord]:
        actor.require_admin()
        return self._payroll.list_all()
