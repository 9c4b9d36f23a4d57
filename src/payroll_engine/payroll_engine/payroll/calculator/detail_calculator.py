from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ...common.money import ZERO, round2, to_decimal
from ...core.exceptions import ValidationError
from ..model import PayLine, PaycheckAmounts
from .base import PaycheckCalculator


def _amount(value: Optional[Decimal], field_name: str) -> Decimal:
    d = to_decimal(value, field_name)
    if d < ZERO:
        raise ValidationError(f"{field_name} cannot be negative")
    return d


class DetailPaycheckCalculator(PaycheckCalculator):
    """Admin-adjusted pay: gross = base + commission; deductions are taken as given."""

    def calculate(self, line: PayLine) -> PaycheckAmounts:
        detail = line.detail
        if detail is None:
            raise ValidationError(f"No paycheck detail for employee {line.employee.employee_id}")

        base = _amount(detail.base_salary, "base_salary")
        commission = _amount(detail.commission_amount, "commission_amount")

        return self._amounts(
            gross_pay=round2(base + commission),
            commission_amount=commission,
            tax_deduction=_amount(detail.tax_deduction, "tax_deduction"),
            provident_fund_deduction=_amount(detail.provident_fund_deduction, "provident_fund_deduction"),
            late_penalty=_amount(detail.late_penalty, "late_penalty"),
            absent_penalty=_amount(detail.absent_penalty, "absent_penalty"),
        )
