from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.enums import AttendanceStatus
from ..employees.repository import EmployeeRepository
from ..leave.repository import LeaveRepository
from .model import AttendanceOverview
from .repository import AttendanceRepository


class AttendanceOverviewService:
    """Read-only dashboard snapshot for one day.

    The three sources are read independently, so the result is best effort.
    Each active employee is counted once, in order of precedence:
    present, late, on leave, absent.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        leave: LeaveRepository,
        *,
        timezone: Optional[str] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._leave = leave
        self._timezone = timezone

    def get_attendance_overview(self, *, today: Optional[date] = None) -> AttendanceOverview:
        today = today or now_local(self._timezone).date()

        roster = {e.employee_id for e in self._employees.list_active()}
        records = self._attendance.list_for_date(today)

        present_ids = {r.employee_id for r in records if r.status == AttendanceStatus.PRESENT} & roster
        late_ids = ({r.employee_id for r in records if r.status == AttendanceStatus.LATE} & roster) - present_ids

        on_leave_ids = {lr.employee_id for lr in self._leave.list_approved_between(today, today)}
        on_leave_ids |= {r.employee_id for r in records if r.status == AttendanceStatus.ON_LEAVE}
        on_leave_ids = (on_leave_ids & roster) - present_ids - late_ids

        total = len(roster)
        absent = max(total - len(present_ids | late_ids | on_leave_ids), 0)

        return AttendanceOverview(
            total=total,
            present=len(present_ids),
            late=len(late_ids),
            on_leave=len(on_leave_ids),
            absent=absent,
        )
