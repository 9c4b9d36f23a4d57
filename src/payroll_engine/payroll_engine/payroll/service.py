from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..common.validators import require_period
from ..core.enums import PayrollStatus
from ..core.exceptions import (
    EmployeeNotFound,
    InvalidStateTransition,
    RunNotFound,
    SeparationOfDutiesViolation,
    ValidationError,
)
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .calculator.base import PaycheckCalculator
from .calculator.detail_calculator import DetailPaycheckCalculator
from .model import PayLine, Paycheck, PaycheckDetail, PayrollRun, PayrollTotals
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


class PayrollService:
    """Payroll run orchestrator: preview (DRAFT) -> finalize (APPROVED) -> pay (PAID).

    Maker-checker: the admin who previewed a run can never finalize it.
    Every paycheck is computed before anything is written, so a failed
    preview leaves no partial run behind.
    """

    def __init__(
        self,
        runs: PayrollRepository,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        *,
        calculator: PaycheckCalculator,
        detail_calculator: Optional[PaycheckCalculator] = None,
        timezone: Optional[str] = None,
    ):
        self._runs = runs
        self._employees = employees
        self._attendance = attendance
        self._calculator = calculator
        self._detail_calculator = detail_calculator or DetailPaycheckCalculator()
        self._timezone = timezone

    # -- commands ---------------------------------------------------------

    def preview_payroll(
        self,
        period_start: Optional[date],
        period_end: Optional[date],
        creator_id: int,
        details: Optional[Sequence[PaycheckDetail]] = None,
        *,
        now: Optional[datetime] = None,
    ) -> PayrollRun:
        require_period(period_start, period_end, label="Pay period")

        if details:
            paychecks = self._paychecks_from_details(period_start, period_end, details)
        else:
            paychecks = self._paychecks_from_attendance(period_start, period_end)

        shell = PayrollRun(
            run_id=None,
            pay_period_start=period_start,
            pay_period_end=period_end,
            status=PayrollStatus.DRAFT,
            created_by=int(creator_id),
            created_at=now or now_local(self._timezone),
            totals=PayrollTotals.from_paychecks(paychecks),
        )
        run = self._runs.save_draft(shell, paychecks)

        logger.info(
            "Payroll run %s previewed by %s for %s..%s: %s paychecks, net %s",
            run.run_id,
            creator_id,
            period_start.isoformat(),
            period_end.isoformat(),
            len(run.paychecks),
            run.totals.net_pay,
        )
        return run

    def finalize_payroll(self, run_id: int, approver_id: int, *, now: Optional[datetime] = None) -> PayrollRun:
        run = self._get_or_raise(run_id)

        if run.created_by == int(approver_id):
            raise SeparationOfDutiesViolation("The creator of the payroll cannot finalize it. Another admin must approve.")
        if run.status != PayrollStatus.DRAFT:
            raise InvalidStateTransition(f"Only DRAFT payrolls can be finalized (run {run_id} is {run.status.value})")

        ok = self._runs.transition(
            int(run_id),
            from_status=PayrollStatus.DRAFT,
            to_status=PayrollStatus.APPROVED,
            approved_by=int(approver_id),
            approved_at=now or now_local(self._timezone),
        )
        if not ok:
            raise InvalidStateTransition(f"Payroll run {run_id} was changed by another request")

        logger.info("Payroll run %s approved by %s", run_id, approver_id)
        return self._get_or_raise(run_id)

    def pay_payroll(self, run_id: int) -> PayrollRun:
        run = self._get_or_raise(run_id)
        if run.status != PayrollStatus.APPROVED:
            raise InvalidStateTransition(f"Only APPROVED payrolls can be marked as paid (run {run_id} is {run.status.value})")

        ok = self._runs.transition(int(run_id), from_status=PayrollStatus.APPROVED, to_status=PayrollStatus.PAID)
        if not ok:
            raise InvalidStateTransition(f"Payroll run {run_id} was changed by another request")

        logger.info("Payroll run %s marked as paid", run_id)
        return self._get_or_raise(run_id)

    def delete_payroll_run(self, run_id: int) -> bool:
        """Delete a DRAFT or APPROVED run. Returns False when the run does not exist."""
        run = self._runs.get_run(int(run_id))
        if not run:
            return False
        if run.status == PayrollStatus.PAID:
            raise InvalidStateTransition("Paid payroll runs cannot be deleted")

        deleted = self._runs.delete_run(int(run_id), allowed_statuses=(PayrollStatus.DRAFT, PayrollStatus.APPROVED))
        if not deleted:
            if self._runs.get_run(int(run_id)):
                raise InvalidStateTransition(f"Payroll run {run_id} was changed by another request")
            return False

        logger.info("Payroll run %s deleted (was %s)", run_id, run.status.value)
        return True

    # -- queries ----------------------------------------------------------

    def get_all_payroll_runs(self) -> Sequence[PayrollRun]:
        return self._runs.list_runs()

    def get_payroll_run(self, run_id: int) -> PayrollRun:
        return self._get_or_raise(run_id)

    def get_paychecks_for_employee(self, employee_id: int) -> Sequence[Paycheck]:
        return self._runs.list_paychecks_for_employee(int(employee_id))

    # -- helpers ----------------------------------------------------------

    def _paychecks_from_attendance(self, start: date, end: date) -> list[Paycheck]:
        paychecks = []
        for employee in self._employees.list_active():
            records = self._attendance.list_for_employee_between(employee.employee_id, start, end)
            worked_days = sum(1 for r in records if r.status.is_worked)
            amounts = self._calculator.calculate(PayLine(employee=employee, worked_days=worked_days))
            paychecks.append(Paycheck.draft(employee, start, end, amounts))
        return paychecks

    def _paychecks_from_details(self, start: date, end: date, details: Sequence[PaycheckDetail]) -> list[Paycheck]:
        seen: set[int] = set()
        paychecks = []
        for detail in details:
            employee = self._active_employee(detail.employee_id)
            if employee.employee_id in seen:
                raise ValidationError(f"Duplicate paycheck line for employee {employee.employee_id}")
            seen.add(employee.employee_id)

            amounts = self._detail_calculator.calculate(PayLine(employee=employee, detail=detail))
            paychecks.append(Paycheck.draft(employee, start, end, amounts))
        return paychecks

    def _active_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise EmployeeNotFound(employee_id)
        if not employee.is_active:
            raise ValidationError(f"Employee {employee_id} is inactive and cannot be paid")
        return employee

    def _get_or_raise(self, run_id: int) -> PayrollRun:
        run = self._runs.get_run(int(run_id))
        if not run:
            raise RunNotFound(run_id)
        return run
