from datetime import date, datetime, time, timezone

import pytest

from src.payroll_engine.payroll_engine.attendance import closure, overview
from src.payroll_engine.payroll_engine.common.datetime_utils import closure_date_for, to_local
from src.payroll_engine.payroll_engine.container import wire_container
from src.payroll_engine.payroll_engine.core.config import EngineConfig


def test_to_local_uses_the_engine_timezone():
    instant = datetime(2026, 10, 20, 3, 59, tzinfo=timezone.utc)

    assert to_local(instant, "America/New_York") == datetime(2026, 10, 19, 23, 59)
    assert to_local(instant, "UTC") == datetime(2026, 10, 20, 3, 59)
    assert to_local(instant, "Asia/Ho_Chi_Minh") == datetime(2026, 10, 20, 10, 59)


@pytest.mark.parametrize(
    "now, expected",
    [
        (datetime(2026, 10, 19, 23, 59), date(2026, 10, 19)),
        (datetime(2026, 10, 19, 23, 59, 40), date(2026, 10, 19)),
        (datetime(2026, 10, 20, 0, 0), date(2026, 10, 19)),
        (datetime(2026, 10, 20, 6, 30), date(2026, 10, 19)),
    ],
)
def test_closure_date_for(now, expected):
    assert closure_date_for(now, time(23, 59)) == expected


def test_closer_and_overview_ask_for_the_engine_timezone(
    monkeypatch, employees_repo, attendance_repo, leave_repo, payroll_repo
):
    zones = []
    local_now = datetime(2026, 10, 19, 23, 59)
    monkeypatch.setattr(closure, "now_local", lambda tz=None: zones.append(tz) or local_now)
    monkeypatch.setattr(overview, "now_local", lambda tz=None: zones.append(tz) or local_now)
    container = wire_container(
        engine_config=EngineConfig(
            late_cutoff=time(8, 30), absent_cutoff=time(14, 0), timezone="America/New_York"
        ),
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        payroll_repo=payroll_repo,
    )

    container.absence_closer.run_daily_absence_closure()
    snapshot = container.overview_service.get_attendance_overview()

    assert zones == ["America/New_York", "America/New_York"]
    assert {r.work_date for r in attendance_repo.rows.values()} == {date(2026, 10, 19)}
    assert snapshot.absent == 4
