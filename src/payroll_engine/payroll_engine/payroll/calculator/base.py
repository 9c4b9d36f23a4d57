from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ...common.money import ZERO, ensure_money_range, round2
from ..model import PayLine, PaycheckAmounts


class PaycheckCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(self, line: PayLine) -> PaycheckAmounts:
        raise NotImplementedError

    @staticmethod
    def _amounts(
        *,
        gross_pay: Decimal,
        commission_amount: Decimal,
        tax_deduction: Decimal,
        provident_fund_deduction: Decimal,
        late_penalty: Decimal = ZERO,
        absent_penalty: Decimal = ZERO,
    ) -> PaycheckAmounts:
        # total is rounded once over the raw components; stored components are rounded individually.
        total = round2(tax_deduction + provident_fund_deduction + late_penalty + absent_penalty)
        gross = ensure_money_range(round2(gross_pay), "gross_pay")
        ensure_money_range(total, "total_deductions")
        return PaycheckAmounts(
            gross_pay=gross,
            commission_amount=round2(commission_amount),
            tax_deduction=round2(tax_deduction),
            provident_fund_deduction=round2(provident_fund_deduction),
            late_penalty=round2(late_penalty),
            absent_penalty=round2(absent_penalty),
            total_deductions=total,
            net_pay=gross - total,
        )
