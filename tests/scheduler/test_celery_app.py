from datetime import date, datetime, time
from types import SimpleNamespace

import pytest

from src.payroll_engine.payroll_engine.core.constants import CLOSURE_TASK_NAME
from src.payroll_engine.payroll_engine.scheduler import tasks
from src.payroll_engine.payroll_engine.scheduler.celery_app import make_celery


def test_beat_runs_closure_at_configured_time():
    settings = SimpleNamespace(
        CLOSURE_TIME="22:45",
        TIMEZONE="Asia/Ho_Chi_Minh",
        CELERY_BROKER_URL="memory://",
        CELERY_RESULT_BACKEND="cache+memory://",
    )

    app = make_celery(settings)

    entry = app.conf.beat_schedule["daily-absence-closure"]
    assert entry["task"] == CLOSURE_TASK_NAME
    assert entry["schedule"].hour == {22}
    assert entry["schedule"].minute == {45}
    assert app.conf.timezone == "Asia/Ho_Chi_Minh"


def test_closure_task_runs_the_closer(monkeypatch, container, attendance_repo):
    monkeypatch.setattr(tasks, "load_settings", lambda: SimpleNamespace(DB_CONFIG={}, LOG_LEVEL="WARNING"))
    monkeypatch.setattr(tasks, "build_container", lambda **kwargs: container)
    monkeypatch.setattr(tasks, "now_local", lambda tz=None: datetime(2025, 3, 14, 23, 59))

    result = tasks.run_daily_absence_closure_task()

    assert result == {"work_date": "2025-03-14", "absent_records_created": 4}
    assert tasks.run_daily_absence_closure_task()["absent_records_created"] == 0
    assert tasks.run_daily_absence_closure_task.name == CLOSURE_TASK_NAME


@pytest.mark.parametrize(
    "local_now, expected",
    [
        (datetime(2026, 10, 19, 23, 59), date(2026, 10, 19)),
        # Redelivered after midnight: still the previous day's closure.
        (datetime(2026, 10, 20, 0, 3), date(2026, 10, 19)),
    ],
)
def test_closure_task_closes_the_day_in_the_engine_timezone(
    monkeypatch, container, attendance_repo, local_now, expected
):
    zones = []
    settings = SimpleNamespace(DB_CONFIG={}, LOG_LEVEL="WARNING", TIMEZONE="America/New_York", CLOSURE_TIME="23:59")
    monkeypatch.setattr(tasks, "load_settings", lambda: settings)
    monkeypatch.setattr(tasks, "build_container", lambda **kwargs: container)
    monkeypatch.setattr(tasks, "now_local", lambda tz=None: zones.append(tz) or local_now)

    result = tasks.run_daily_absence_closure_task()

    assert zones == ["America/New_York"]
    assert result["work_date"] == expected.isoformat()
    assert {r.work_date for r in attendance_repo.rows.values()} == {expected}


def test_clock_in_after_late_closure_is_not_blocked(monkeypatch, container, attendance_repo):
    settings = SimpleNamespace(DB_CONFIG={}, LOG_LEVEL="WARNING", TIMEZONE="America/New_York")
    monkeypatch.setattr(tasks, "load_settings", lambda: settings)
    monkeypatch.setattr(tasks, "build_container", lambda **kwargs: container)
    monkeypatch.setattr(tasks, "now_local", lambda tz=None: datetime(2026, 10, 20, 0, 1))

    tasks.run_daily_absence_closure_task()
    record = container.attendance_service.clock_in(3, now=datetime(2026, 10, 20, 8, 0))

    assert record.work_date == date(2026, 10, 20)
    assert record.clock_in == time(8, 0)
