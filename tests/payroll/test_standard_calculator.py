import pytest

from src.workforce_records.workforce_records.payroll.calculator.standard_calculator import (
    StandardSalaryCalculator,
    compute_salary,
)


@pytest.mark.parametrize("wage", [10000, 30000, 65000, 85000, 150000, 1234567.89])
def test_components_cover_wage_and_fixed_allowance_not_negative(wage):
    s = compute_salary(wage)

    assert s.fixed_allowance >= 0
    assert s.basic + s.hra + s.standard_allowance + s.performance_bonus + s.lta + s.fixed_allowance >= wage - 1e-6
    assert s.pf == pytest.approx(0.06 * wage)


def test_breakdown_for_typical_wage():
    s = compute_salary(50000)

    assert s.basic == 25000
    assert s.hra == 12500
    assert s.standard_allowance == 4167
    assert s.performance_bonus == pytest.approx(4165)
    assert s.lta == pytest.approx(4166.5)
    assert s.fixed_allowance == pytest.approx(50000 - (25000 + 12500 + 4167 + 4165 + 4166.5))
    assert s.pf == pytest.approx(3000)
    assert s.pt == 200
    assert s.gross_components == pytest.approx(50000)
    assert s.net_pay == pytest.approx(50000 - 3000 - 200)


def test_small_wage_floors_fixed_allowance_and_exceeds_wage():
    s = compute_salary(5000)

    assert s.fixed_allowance == 0
    assert s.gross_components > 5000


def test_same_wage_gives_identical_breakdown():
    assert compute_salary(72000) == compute_salary(72000)


def test_configured_standard_allowance():
    s = StandardSalaryCalculator(standard_allowance=1000).compute(50000)

    assert s.standard_allowance == 1000
    assert s.gross_components == pytest.approx(50000)
