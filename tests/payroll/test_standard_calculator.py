from decimal import Decimal

from src.ems_system.ems_system.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.ems_system.ems_system.payroll.model import PayrollPolicy


def test_full_month_without_leave_pays_base_salary():
    calc = StandardPayrollCalculator()

    result = calc.compute(base_salary=Decimal("26000"), total_hours=Decimal("208"), unpaid_days=0)

    assert result.per_hour_rate == Decimal("125")
    assert result.earnings == Decimal("26000")
    assert result.deductions == Decimal("0")
    assert result.net_salary == Decimal("26000")


def test_unpaid_days_deduct_one_day_salary_each():
    calc = StandardPayrollCalculator()

    result = calc.compute(base_salary=Decimal("52000"), total_hours=Decimal("100"), unpaid_days=2)

    assert result.per_hour_rate == Decimal("250")
    assert result.earnings == Decimal("25000.00")
    assert result.per_day_salary == Decimal("2000.00")
    assert result.deductions == Decimal("4000.00")
    assert result.net_salary == Decimal("21000.00")


def test_net_is_rounded_from_unrounded_figures_and_may_be_negative():
    calc = StandardPayrollCalculator()

    result = calc.compute(base_salary=Decimal("30000"), total_hours=Decimal("7.34"), unpaid_days=1)

    assert result.per_hour_rate == Decimal("144.2308")
    assert result.earnings == Decimal("1058.65")
    assert result.deductions == Decimal("1153.85")
    # 1058.6538... - 1153.8461... = -95.1923..., not 1058.65 - 1153.85
    assert result.net_salary == Decimal("-95.19")


def test_policy_changes_the_month_model():
    calc = StandardPayrollCalculator(PayrollPolicy(working_days_per_month=20, hours_per_day=8))

    result = calc.compute(base_salary=Decimal("16000"), total_hours=Decimal("160"), unpaid_days=1)

    assert result.per_hour_rate == Decimal("100")
    assert result.deductions == Decimal("800.00")
    assert result.net_salary == Decimal("15200.00")


def test_zero_hours_yields_zero_earnings():
    result = StandardPayrollCalculator().compute(base_salary=Decimal("26000"), total_hours=Decimal("0"), unpaid_days=0)

    assert result.earnings == Decimal("0")
    assert result.net_salary == Decimal("0")
