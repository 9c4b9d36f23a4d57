from __future__ import annotations

import dataclasses
from collections import defaultdict
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchfirst
from .model import Paycheck, PayrollRun, PayrollTotals
from .repository import PayrollRepository

_RUN_SELECT = """
    SELECT run_id, pay_period_start, pay_period_end, status, created_by, created_at,
           approved_by, approved_at, total_gross_pay, total_deductions, total_net_pay
    FROM payroll_runs
"""

_PAYCHECK_SELECT = """
    SELECT paycheck_id, run_id, employee_id, employee_username, pay_period_start, pay_period_end,
           gross_pay, commission_amount, tax_deduction, provident_fund_deduction,
           late_penalty, absent_penalty, total_deductions, net_pay, status
    FROM paychecks
"""


def _row_to_paycheck(r: dict) -> Paycheck:
    return Paycheck(
        paycheck_id=int(r["paycheck_id"]),
        run_id=int(r["run_id"]),
        employee_id=int(r["employee_id"]),
        employee_username=r["employee_username"],
        pay_period_start=r["pay_period_start"],
        pay_period_end=r["pay_period_end"],
        gross_pay=r["gross_pay"],
        commission_amount=r["commission_amount"],
        tax_deduction=r["tax_deduction"],
        provident_fund_deduction=r["provident_fund_deduction"],
        late_penalty=r["late_penalty"],
        absent_penalty=r["absent_penalty"],
        total_deductions=r["total_deductions"],
        net_pay=r["net_pay"],
        status=PayrollStatus(r["status"]),
    )


def _row_to_run(r: dict, paychecks: Sequence[Paycheck]) -> PayrollRun:
    return PayrollRun(
        run_id=int(r["run_id"]),
        pay_period_start=r["pay_period_start"],
        pay_period_end=r["pay_period_end"],
        status=PayrollStatus(r["status"]),
        created_by=int(r["created_by"]),
        created_at=r["created_at"],
        approved_by=int(r["approved_by"]) if r.get("approved_by") is not None else None,
        approved_at=r.get("approved_at"),
        totals=PayrollTotals(
            gross_pay=r["total_gross_pay"],
            deductions=r["total_deductions"],
            net_pay=r["total_net_pay"],
        ),
        paychecks=tuple(paychecks),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save_draft(self, run: PayrollRun, paychecks: Sequence[Paycheck]) -> PayrollRun:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payroll_runs(pay_period_start, pay_period_end, status, created_by, created_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (run.pay_period_start, run.pay_period_end, run.status.value, int(run.created_by), run.created_at),
            )
            run_id = int(cur.lastrowid)

            saved: list[Paycheck] = []
            for p in paychecks:
                cur.execute(
                    """
                    INSERT INTO paychecks(
                        run_id, employee_id, employee_username, pay_period_start, pay_period_end,
                        gross_pay, commission_amount, tax_deduction, provident_fund_deduction,
                        late_penalty, absent_penalty, total_deductions, net_pay, status)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        run_id, p.employee_id, p.employee_username, p.pay_period_start, p.pay_period_end,
                        p.gross_pay, p.commission_amount, p.tax_deduction, p.provident_fund_deduction,
                        p.late_penalty, p.absent_penalty, p.total_deductions, p.net_pay, p.status.value,
                    ),
                )
                saved.append(dataclasses.replace(p, paycheck_id=int(cur.lastrowid), run_id=run_id))

            cur.execute(
                """
                UPDATE payroll_runs
                SET total_gross_pay=%s, total_deductions=%s, total_net_pay=%s
                WHERE run_id=%s
                """,
                (run.totals.gross_pay, run.totals.deductions, run.totals.net_pay, run_id),
            )

        return dataclasses.replace(run, run_id=run_id, paychecks=tuple(saved))

    def get_run(self, run_id: int) -> Optional[PayrollRun]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_RUN_SELECT + " WHERE run_id=%s", (int(run_id),))
            r = fetchfirst(cur)
            if not r:
                return None
            cur.execute(_PAYCHECK_SELECT + " WHERE run_id=%s ORDER BY employee_id", (int(run_id),))
            return _row_to_run(r, [_row_to_paycheck(p) for p in fetchall(cur)])

    def list_runs(self) -> Sequence[PayrollRun]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_RUN_SELECT + " ORDER BY pay_period_start DESC, run_id DESC")
            runs = fetchall(cur)
            cur.execute(_PAYCHECK_SELECT + " ORDER BY run_id, employee_id")
            by_run: dict[int, list[Paycheck]] = defaultdict(list)
            for p in fetchall(cur):
                pc = _row_to_paycheck(p)
                by_run[pc.run_id].append(pc)
            return [_row_to_run(r, by_run.get(int(r["run_id"]), [])) for r in runs]

    def list_paychecks_for_employee(self, employee_id: int) -> Sequence[Paycheck]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _PAYCHECK_SELECT + " WHERE employee_id=%s ORDER BY pay_period_start DESC",
                (int(employee_id),),
            )
            return [_row_to_paycheck(p) for p in fetchall(cur)]

    def transition(
        self,
        run_id: int,
        *,
        from_status: PayrollStatus,
        to_status: PayrollStatus,
        approved_by: Optional[int] = None,
        approved_at: Optional[datetime] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # Lock the run row so the guard and both updates see the same status.
            cur.execute("SELECT status FROM payroll_runs WHERE run_id=%s FOR UPDATE", (int(run_id),))
            r = fetchfirst(cur)
            if not r or r["status"] != from_status.value:
                return False

            cur.execute(
                "UPDATE paychecks SET status=%s WHERE run_id=%s AND status=%s",
                (to_status.value, int(run_id), from_status.value),
            )
            if approved_by is not None:
                cur.execute(
                    """
                    UPDATE payroll_runs SET status=%s, approved_by=%s, approved_at=%s
                    WHERE run_id=%s AND status=%s
                    """,
                    (to_status.value, int(approved_by), approved_at, int(run_id), from_status.value),
                )
            else:
                cur.execute(
                    "UPDATE payroll_runs SET status=%s WHERE run_id=%s AND status=%s",
                    (to_status.value, int(run_id), from_status.value),
                )
            return cur.rowcount > 0

    def delete_run(self, run_id: int, *, allowed_statuses: Iterable[PayrollStatus]) -> bool:
        statuses = [s.value for s in allowed_statuses]
        placeholders = ",".join(["%s"] * len(statuses))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT run_id FROM payroll_runs WHERE run_id=%s AND status IN ({placeholders}) FOR UPDATE",
                (int(run_id), *statuses),
            )
            if not fetchfirst(cur):
                return False
            cur.execute("DELETE FROM paychecks WHERE run_id=%s", (int(run_id),))
            cur.execute("DELETE FROM payroll_runs WHERE run_id=%s", (int(run_id),))
            return cur.rowcount > 0
