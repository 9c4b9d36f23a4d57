from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.money import to_decimal
from ..common.session_guard import admin_required, current_user_id, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from .model import Paycheck, PaycheckDetail, PayrollRun


def paycheck_to_json(p: Paycheck) -> dict:
    # Money goes out as decimal strings, never floats.
    return {
        "id": p.paycheck_id,
        "payroll_run_id": p.run_id,
        "employee_id": p.employee_id,
        "employee_username": p.employee_username,
        "pay_period_start": p.pay_period_start.isoformat(),
        "pay_period_end": p.pay_period_end.isoformat(),
        "gross_pay": str(p.gross_pay),
        "commission_amount": str(p.commission_amount),
        "tax_deduction": str(p.tax_deduction),
        "provident_fund_deduction": str(p.provident_fund_deduction),
        "late_penalty_deduction": str(p.late_penalty),
        "absent_penalty_deduction": str(p.absent_penalty),
        "total_deductions": str(p.total_deductions),
        "net_pay": str(p.net_pay),
        "status": p.status.value,
    }


def run_to_json(run: PayrollRun) -> dict:
    return {
        "id": run.run_id,
        "pay_period_start": run.pay_period_start.isoformat(),
        "pay_period_end": run.pay_period_end.isoformat(),
        "status": run.status.value,
        "created_by": run.created_by,
        "created_at": run.created_at.isoformat(),
        "approved_by": run.approved_by,
        "approved_at": run.approved_at.isoformat() if run.approved_at else None,
        "total_gross_pay": str(run.totals.gross_pay),
        "total_deductions": str(run.totals.deductions),
        "total_net_pay": str(run.totals.net_pay),
        "paychecks": [paycheck_to_json(p) for p in run.paychecks],
    }


def _parse_detail(item: dict) -> PaycheckDetail:
    if not isinstance(item, dict) or item.get("employee_id") in (None, ""):
        raise ValidationError("Each paycheck detail needs an employee_id")
    try:
        employee_id = int(item["employee_id"])
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid employee_id: {item['employee_id']!r}")
    return PaycheckDetail(
        employee_id=employee_id,
        base_salary=to_decimal(item.get("base_salary"), "base_salary"),
        commission_amount=to_decimal(item.get("commission_amount"), "commission_amount"),
        tax_deduction=to_decimal(item.get("tax_deduction"), "tax_deduction"),
        provident_fund_deduction=to_decimal(item.get("provident_fund_deduction"), "provident_fund_deduction"),
        late_penalty=to_decimal(item.get("late_penalty_deduction"), "late_penalty_deduction"),
        absent_penalty=to_decimal(item.get("absent_penalty_deduction"), "absent_penalty_deduction"),
    )


def register(app: Flask, container: Container) -> None:
    svc = container.payroll_service

    @app.route("/api/payroll/my-payslips", methods=["GET"], endpoint="my_payslips")
    @login_required
    def my_payslips():
        paychecks = svc.get_paychecks_for_employee(current_user_id())
        return jsonify([paycheck_to_json(p) for p in paychecks])

    @app.route("/api/payroll/runs", methods=["GET"], endpoint="payroll_runs")
    @admin_required
    def payroll_runs():
        return jsonify([run_to_json(r) for r in svc.get_all_payroll_runs()])

    @app.route("/api/payroll/runs/<int:run_id>", methods=["GET"], endpoint="payroll_run")
    @admin_required
    def payroll_run(run_id: int):
        return jsonify(run_to_json(svc.get_payroll_run(run_id)))

    @app.route("/api/payroll/preview", methods=["POST"], endpoint="payroll_preview")
    @admin_required
    def payroll_preview():
        body = request.get_json(silent=True) or {}
        details = body.get("details") or []
        if not isinstance(details, list):
            raise ValidationError("details must be a list")

        run = svc.preview_payroll(
            parse_iso_date(body.get("pay_period_start") or ""),
            parse_iso_date(body.get("pay_period_end") or ""),
            current_user_id(),
            [_parse_detail(d) for d in details],
        )
        return jsonify(run_to_json(run)), 201

    @app.route("/api/payroll/runs/<int:run_id>/finalize", methods=["POST"], endpoint="payroll_finalize")
    @admin_required
    def payroll_finalize(run_id: int):
        return jsonify(run_to_json(svc.finalize_payroll(run_id, current_user_id())))

    @app.route("/api/payroll/runs/<int:run_id>/pay", methods=["POST"], endpoint="payroll_pay")
    @admin_required
    def payroll_pay(run_id: int):
        return jsonify(run_to_json(svc.pay_payroll(run_id)))

    @app.route("/api/payroll/runs/<int:run_id>", methods=["DELETE"], endpoint="payroll_delete")
    @admin_required
    def payroll_delete(run_id: int):
        if not svc.delete_payroll_run(run_id):
            return jsonify({"error": f"Payroll run not found with ID: {run_id}"}), 404
        return "", 204
