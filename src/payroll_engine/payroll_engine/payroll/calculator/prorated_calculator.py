from __future__ import annotations

from ...common.money import rate_or_zero, round2, round4, to_decimal
from ...core.exceptions import ValidationError
from ..model import PayLine, PaycheckAmounts
from .base import PaycheckCalculator


class ProratedPaycheckCalculator(PaycheckCalculator):
    """Attendance-derived pay.

    daily_rate = base / standard_days (4 dp); gross = daily_rate * worked_days + commission;
    tax and provident fund are percentages of gross. Missing or negative
    percentages count as zero so previews work on incomplete profiles.
    """

    def __init__(self, standard_working_days: int):
        if int(standard_working_days) <= 0:
            raise ValidationError("Standard working days must be positive")
        self._standard_days = int(standard_working_days)

    def calculate(self, line: PayLine) -> PaycheckAmounts:
        employee = line.employee
        if line.worked_days < 0:
            raise ValidationError("Worked days cannot be negative")

        base = to_decimal(employee.base_salary, "base_salary")
        daily_rate = round4(base / self._standard_days)
        commission = base * rate_or_zero(employee.commission_percentage)
        gross = round2(daily_rate * line.worked_days + commission)

        return self._amounts(
            gross_pay=gross,
            commission_amount=round2(commission),
            tax_deduction=round2(gross * rate_or_zero(employee.tax_percentage)),
            provident_fund_deduction=round2(gross * rate_or_zero(employee.provident_fund_percentage)),
        )
