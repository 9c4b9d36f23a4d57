from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional

from ..common.money import ZERO, sum_money
from ..core.enums import PayrollStatus
from ..employees.model import Employee


@dataclass(frozen=True)
class PaycheckDetail:
    """Admin-supplied paycheck line that bypasses attendance lookup.

    All amounts are absolute currency values; missing ones count as zero.
    """

    employee_id: int
    base_salary: Optional[Decimal] = None
    commission_amount: Optional[Decimal] = None
    tax_deduction: Optional[Decimal] = None
    provident_fund_deduction: Optional[Decimal] = None
    late_penalty: Optional[Decimal] = None
    absent_penalty: Optional[Decimal] = None


@dataclass(frozen=True)
class PayLine:
    """Calculator input for one employee in one period."""

    employee: Employee
    worked_days: int = 0
    detail: Optional[PaycheckDetail] = None


@dataclass(frozen=True)
class PaycheckAmounts:
    gross_pay: Decimal
    commission_amount: Decimal
    tax_deduction: Decimal
    provident_fund_deduction: Decimal
    late_penalty: Decimal
    absent_penalty: Decimal
    total_deductions: Decimal
    net_pay: Decimal


@dataclass(frozen=True)
class Paycheck:
    paycheck_id: Optional[int]
    run_id: Optional[int]
    employee_id: int
    employee_username: str
    pay_period_start: date
    pay_period_end: date
    gross_pay: Decimal
    commission_amount: Decimal
    tax_deduction: Decimal
    provident_fund_deduction: Decimal
    late_penalty: Decimal
    absent_penalty: Decimal
    total_deductions: Decimal
    net_pay: Decimal
    status: PayrollStatus = PayrollStatus.DRAFT

    @classmethod
    def draft(cls, employee: Employee, start: date, end: date, amounts: PaycheckAmounts) -> "Paycheck":
        return cls(
            paycheck_id=None,
            run_id=None,
            employee_id=employee.employee_id,
            employee_username=employee.username,
            pay_period_start=start,
            pay_period_end=end,
            gross_pay=amounts.gross_pay,
            commission_amount=amounts.commission_amount,
            tax_deduction=amounts.tax_deduction,
            provident_fund_deduction=amounts.provident_fund_deduction,
            late_penalty=amounts.late_penalty,
            absent_penalty=amounts.absent_penalty,
            total_deductions=amounts.total_deductions,
            net_pay=amounts.net_pay,
        )


@dataclass(frozen=True)
class PayrollTotals:
    gross_pay: Decimal = ZERO
    deductions: Decimal = ZERO
    net_pay: Decimal = ZERO

    @classmethod
    def from_paychecks(cls, paychecks: Iterable[Paycheck]) -> "PayrollTotals":
        # Sum already-rounded paycheck values; never re-derive from raw inputs.
        items = list(paychecks)
        return cls(
            gross_pay=sum_money(p.gross_pay for p in items),
            deductions=sum_money(p.total_deductions for p in items),
            net_pay=sum_money(p.net_pay for p in items),
        )


@dataclass(frozen=True)
class PayrollRun:
    """Aggregate root. Paychecks are owned by the run and share its status."""

    run_id: Optional[int]
    pay_period_start: date
    pay_period_end: date
    status: PayrollStatus
    created_by: int
    created_at: datetime
    totals: PayrollTotals = field(default_factory=PayrollTotals)
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    paychecks: tuple[Paycheck, ...] = ()
