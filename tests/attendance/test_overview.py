from datetime import time

from src.payroll_engine.payroll_engine.core.enums import AttendanceStatus


def _overview(container, today):
    return container.overview_service.get_attendance_overview(today=today)


def test_overview_counts_each_bucket(container, attendance_repo, leave_repo, today):
    attendance_repo.add(employee_id=1, work_date=today, status=AttendanceStatus.PRESENT, clock_in=time(8, 0))
    attendance_repo.add(employee_id=3, work_date=today, status=AttendanceStatus.LATE, clock_in=time(9, 0))
    leave_repo.approved(employee_id=4, start_date=today, end_date=today)

    ov = _overview(container, today)

    assert ov.total == 4
    assert (ov.present, ov.late, ov.on_leave, ov.absent) == (1, 1, 1, 1)


def test_overview_buckets_always_sum_to_total(container, attendance_repo, leave_repo, today):
    # Leave approved after clock-in: the worked status wins and nobody is counted twice.
    attendance_repo.add(employee_id=3, work_date=today, status=AttendanceStatus.PRESENT, clock_in=time(8, 0))
    leave_repo.approved(employee_id=3, start_date=today, end_date=today)
    attendance_repo.add(employee_id=4, work_date=today, status=AttendanceStatus.ON_LEAVE)
    leave_repo.approved(employee_id=4, start_date=today, end_date=today)

    ov = _overview(container, today)

    assert ov.present + ov.late + ov.on_leave + ov.absent == ov.total
    assert ov.present == 1
    assert ov.on_leave == 1


def test_overview_ignores_inactive_employees(container, attendance_repo, leave_repo, today):
    attendance_repo.add(employee_id=5, work_date=today, status=AttendanceStatus.PRESENT, clock_in=time(8, 0))
    leave_repo.approved(employee_id=5, start_date=today, end_date=today)

    ov = _overview(container, today)

    assert ov.total == 4
    assert ov.present == 0
    assert ov.on_leave == 0
    assert ov.absent == 4


def test_overview_everyone_absent_before_any_clock_in(container, today):
    ov = _overview(container, today)

    assert ov.as_dict() == {"total": 4, "present": 0, "late": 0, "on_leave": 0, "absent": 4}


def test_overview_counts_closed_absent_rows_as_absent(container, attendance_repo, today):
    attendance_repo.add(employee_id=1, work_date=today, status=AttendanceStatus.PRESENT, clock_in=time(8, 0))
    container.absence_closer.run_daily_absence_closure(today=today)

    ov = _overview(container, today)

    assert ov.present == 1
    assert ov.absent == 3
