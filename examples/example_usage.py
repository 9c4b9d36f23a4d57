"""Example: drive a payroll run through the service layer, without Flask.

Admin 1 previews, admin 2 approves, then the run is marked as paid.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.payroll_engine.payroll_engine.container import build_container
from src.payroll_engine.payroll_engine.core.config import EngineConfig


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, engine_config=EngineConfig.from_settings(settings))
    payroll = container.payroll_service

    run = payroll.preview_payroll(date(2025, 1, 1), date(2025, 1, 31), creator_id=1)
    print(f"run {run.run_id}: {run.status.value}, net {run.totals.net_pay}")

    run = payroll.finalize_payroll(run.run_id, approver_id=2)
    run = payroll.pay_payroll(run.run_id)
    for p in run.paychecks:
        print(f"  {p.employee_username}: gross {p.gross_pay} net {p.net_pay} ({p.status.value})")

    print(container.overview_service.get_attendance_overview().as_dict())


if __name__ == "__main__":
    main()
