from decimal import Decimal

import pytest

from src.payroll_engine.payroll_engine.core.exceptions import ValidationError
from src.payroll_engine.payroll_engine.payroll.calculator.detail_calculator import DetailPaycheckCalculator
from src.payroll_engine.payroll_engine.payroll.model import PayLine, PaycheckDetail


def _line(make_employee, **amounts):
    return PayLine(employee=make_employee(9), detail=PaycheckDetail(employee_id=9, **amounts))


def test_detail_amounts_are_taken_as_given(make_employee):
    amounts = DetailPaycheckCalculator().calculate(
        _line(
            make_employee,
            base_salary=Decimal("2500.00"),
            commission_amount=Decimal("120.50"),
            tax_deduction=Decimal("262.05"),
            provident_fund_deduction=Decimal("100.00"),
            late_penalty=Decimal("15.00"),
            absent_penalty=Decimal("50.00"),
        )
    )

    assert amounts.gross_pay == Decimal("2620.50")
    assert amounts.total_deductions == Decimal("427.05")
    assert amounts.net_pay == Decimal("2193.45")
    assert amounts.late_penalty == Decimal("15.00")


def test_missing_detail_amounts_count_as_zero(make_employee):
    amounts = DetailPaycheckCalculator().calculate(_line(make_employee, base_salary=Decimal("1000")))

    assert amounts.gross_pay == Decimal("1000.00")
    assert amounts.total_deductions == Decimal("0.00")
    assert amounts.net_pay == Decimal("1000.00")


def test_negative_detail_amount_rejected(make_employee):
    with pytest.raises(ValidationError):
        DetailPaycheckCalculator().calculate(_line(make_employee, base_salary=Decimal("1000"), late_penalty=Decimal("-1")))


def test_line_without_detail_rejected(make_employee):
    with pytest.raises(ValidationError):
        DetailPaycheckCalculator().calculate(PayLine(employee=make_employee(9)))


@pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity", "sNaN", "1e30", "10000000000.00"])
def test_non_finite_or_oversized_amount_rejected(make_employee, value):
    with pytest.raises(ValidationError):
        DetailPaycheckCalculator().calculate(_line(make_employee, base_salary=value))


def test_gross_above_column_range_rejected(make_employee):
    with pytest.raises(ValidationError):
        DetailPaycheckCalculator().calculate(
            _line(make_employee, base_salary=Decimal("9999999999.99"), commission_amount=Decimal("0.01"))
        )


def test_largest_storable_amount_accepted(make_employee):
    amounts = DetailPaycheckCalculator().calculate(_line(make_employee, base_salary="9999999999.99"))

    assert amounts.gross_pay == Decimal("9999999999.99")
