from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from src.ems_system.ems_system.core.enums import LeaveStatus
from src.ems_system.ems_system.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.ems_system.ems_system.employees.model import Employee


@pytest.fixture
def engine(container):
    return container.payroll_engine


def test_full_month_pays_base_salary(engine, attendance_repo, payroll_repo, admin):
    attendance_repo.add(2, datetime(2024, 3, 1, 9), datetime(2024, 3, 1, 17), 208)

    generated = engine.generate_for_employee(admin, 2, 3, 2024)

    assert generated.net_salary == Decimal("26000.00")
    record = payroll_repo.list_for_employee(2)[0]
    assert record.per_hour_rate == Decimal("125")
    assert record.earnings == Decimal("26000")
    assert record.deductions == Decimal("0")
    assert (record.month, record.year) == (3, 2024)


def test_only_hours_of_the_requested_month_count(engine, attendance_repo, admin):
    attendance_repo.add(2, datetime(2024, 2, 29, 9), datetime(2024, 2, 29, 17), 8)
    attendance_repo.add(2, datetime(2024, 3, 1, 9), datetime(2024, 3, 1, 17), 8)

    generated = engine.generate_for_employee(admin, 2, 3, 2024)

    assert generated.net_salary == Decimal("1000.00")


def test_approved_leave_starting_in_month_is_deducted(engine, attendance_repo, leaves_repo, admin):
    attendance_repo.add(2, datetime(2024, 3, 1, 9), datetime(2024, 3, 1, 17), 200)
    leaves_repo.add_request(2, 1, date(2024, 3, 20), date(2024, 3, 21), status=LeaveStatus.APPROVED)
    leaves_repo.add_request(2, 1, date(2024, 3, 25), date(2024, 3, 25), status=LeaveStatus.PENDING)
    leaves_repo.add_request(2, 1, date(2024, 3, 27), date(2024, 3, 27), status=LeaveStatus.REJECTED)

    engine.generate_for_employee(admin, 2, 3, 2024)

    record = engine.history(2)[0]
    assert record.earnings == Decimal("25000.00")
    assert record.deductions == Decimal("1000.00")
    assert record.net_salary == Decimal("24000.00")


def test_regeneration_is_rejected_and_record_unchanged(engine, attendance_repo, payroll_repo, admin):
    attendance_repo.add(2, datetime(2024, 3, 1, 9), datetime(2024, 3, 1, 17), 8)
    engine.generate_for_employee(admin, 2, 3, 2024)
    before = payroll_repo.list_for_employee(2)

    attendance_repo.add(2, datetime(2024, 3, 2, 9), datetime(2024, 3, 2, 17), 8)
    with pytest.raises(ConflictError):
        engine.generate_for_employee(admin, 2, 3, 2024)

    assert payroll_repo.list_for_employee(2) == before


def test_insert_losing_race_reports_conflict(engine, payroll_repo, admin):
    payroll_repo.insert_record = lambda **kwargs: None

    with pytest.raises(ConflictError):
        engine.generate_for_employee(admin, 2, 3, 2024)


def test_missing_base_salary_is_not_found(engine, employees_repo, admin):
    employees_repo.employees[3] = Employee(employee_id=3, user_id=3, base_salary=None)

    with pytest.raises(NotFoundError):
        engine.generate_for_employee(admin, 3, 3, 2024)


def test_inactive_employee_is_not_found(engine, employees_repo, admin):
    employees_repo.employees[3] = Employee(employee_id=3, user_id=3, base_salary=Decimal("1000"), is_active=False)

    with pytest.raises(NotFoundError):
        engine.generate_for_employee(admin, 3, 3, 2024)


@pytest.mark.parametrize("month, year", [(0, 2024), (13, 2024), ("x", 2024), (3, None)])
def test_invalid_period_is_rejected(engine, admin, month, year):
    with pytest.raises(ValidationError):
        engine.generate_for_employee(admin, 2, month, year)


def test_non_admin_cannot_generate(engine, employee_actor):
    with pytest.raises(AuthorizationError):
        engine.generate_for_employee(employee_actor, 2, 3, 2024)
    with pytest.raises(AuthorizationError):
        engine.generate_for_all_active(employee_actor, 3, 2024)


def test_batch_isolates_failures(engine, employees_repo, payroll_repo, admin):
    employees_repo.employees[3] = Employee(employee_id=3, user_id=3, base_salary=None)

    result = engine.generate_for_all_active(admin, 3, 2024)

    assert [g.employee_id for g in result.generated] == [1, 2]
    assert result.skipped == []
    assert [(f.employee_id, f.kind) for f in result.failed] == [(3, "not_found")]
    assert payroll_repo.exists_for_period(1, month=3, year=2024)
    assert payroll_repo.exists_for_period(2, month=3, year=2024)
    assert not payroll_repo.exists_for_period(3, month=3, year=2024)


def test_batch_skips_already_generated(engine, admin):
    engine.generate_for_employee(admin, 1, 3, 2024)

    result = engine.generate_for_all_active(admin, 3, 2024)

    assert result.skipped == [1]
    assert [g.employee_id for g in result.generated] == [2]


def test_batch_is_idempotent(engine, payroll_repo, admin):
    engine.generate_for_all_active(admin, 3, 2024)
    second = engine.generate_for_all_active(admin, 3, 2024)

    assert second.generated == []
    assert second.skipped == [1, 2]
    assert len(payroll_repo.list_all()) == 2


def test_batch_reports_unexpected_errors_as_internal(engine, attendance_repo, admin):
    def broken(employee_id, *, month, year):
        if employee_id == 1:
            raise RuntimeError("connection lost")
        return Decimal("0")

    attendance_repo.total_hours_for_month = broken

    result = engine.generate_for_all_active(admin, 3, 2024)

    assert [g.employee_id for g in result.generated] == [2]
    assert [(f.employee_id, f.kind) for f in result.failed] == [(1, "internal_error")]


def test_batch_with_no_active_employees_is_empty(engine, employees_repo, admin):
    employees_repo.employees.clear()

    result = engine.generate_for_all_active(admin, 3, 2024)

    assert result.to_dict() == {"month": 3, "year": 2024, "generated": [], "skipped": [], "failed": []}


def test_history_newest_first_and_admin_views(engine, admin, employee_actor):
    engine.generate_for_employee(admin, 2, 1, 2024)
    engine.generate_for_employee(admin, 2, 2, 2024)
    engine.generate_for_employee(admin, 1, 2, 2024)

    assert [(r.month, r.year) for r in engine.history(2)] == [(2, 2024), (1, 2024)]
    assert len(engine.history_of(admin, 2)) == 2
    assert [r.employee_id for r in engine.all_records(admin)] == [1, 2, 2]
    with pytest.raises(AuthorizationError):
        engine.all_records(employee_actor)
    with pytest.raises(AuthorizationError):
        engine.history_of(employee_actor, 2)
