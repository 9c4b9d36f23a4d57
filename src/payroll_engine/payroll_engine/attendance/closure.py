from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import now_local
from ..employees.repository import EmployeeRepository
from ..leave.repository import LeaveRepository
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class DailyAbsenceCloser:
    """Nightly job: give every active employee without a record or approved leave an Absent row.

    Safe to re-run for the same day; employees closed by an earlier run already
    have a record and drop out of the candidate set.
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

    def run_daily_absence_closure(self, *, today: Optional[date] = None) -> int:
        today = today or now_local(self._timezone).date()

        active_ids = {e.employee_id for e in self._employees.list_active()}
        recorded_ids = {r.employee_id for r in self._attendance.list_for_date(today)}
        on_leave_ids = {lr.employee_id for lr in self._leave.list_approved_between(today, today)}

        missing = sorted(active_ids - recorded_ids - on_leave_ids)
        inserted = self._attendance.create_absent_records(employee_ids=missing, work_date=today) if missing else 0

        logger.info(
            "Daily absence closure for %s: %s active, %s recorded, %s on leave, %s absent records created",
            today.isoformat(),
            len(active_ids),
            len(recorded_ids),
            len(on_leave_ids),
            inserted,
        )
        return inserted
