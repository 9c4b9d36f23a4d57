from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Optional, Sequence

from ..common.validators import require_period
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT, MAX_HISTORY_LIMIT
from ..core.enums import AttendanceStatus
from ..core.exceptions import AttendanceNotFound, AuthorizationError, EmployeeNotFound, ValidationError
from ..employees.repository import EmployeeRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _clamp_limit(limit: Optional[int]) -> int:
    return max(1, min(int(limit or DEFAULT_HISTORY_LIMIT), MAX_HISTORY_LIMIT))


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        strategy_factory: AttendanceStrategyFactory,
        timezone: Optional[str] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._factory = strategy_factory
        self._timezone = timezone

    def clock_in(
        self,
        employee_id: int,
        *,
        clock_in: Optional[time] = None,
        remarks: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        """Record today's clock-in; the status comes from the configured cutoffs."""
        now = now or now_local(self._timezone)
        today = now.date()
        clock_in = clock_in or now.time().replace(microsecond=0)

        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise EmployeeNotFound(employee_id)
        if not employee.is_active:
            raise ValidationError(f"Employee {employee_id} is not active")

        if self._attendance.get_for_employee_and_date(int(employee_id), today):
            raise ValidationError("Attendance already recorded for today")

        decision = self._factory.classify(clock_in)
        attendance_id = self._attendance.create_record(
            employee_id=int(employee_id),
            work_date=today,
            clock_in=clock_in,
            status=decision.status,
            remarks=(remarks or "").strip() or decision.remarks,
        )
        return self._get_or_raise(attendance_id)

    def clock_out(
        self,
        attendance_id: int,
        *,
        acting_user_id: int,
        is_admin: bool = False,
        clock_out: Optional[time] = None,
        remarks: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        record = self._get_or_raise(attendance_id)
        if not is_admin and record.employee_id != int(acting_user_id):
            raise AuthorizationError("You can only clock out of your own attendance record")
        if record.clock_in is None:
            raise ValidationError("Cannot clock out without a clock-in")
        if record.clock_out is not None and not is_admin:
            raise ValidationError("Already clocked out")

        clock_out = clock_out or (now or now_local(self._timezone)).time().replace(microsecond=0)
        if clock_out < record.clock_in:
            raise ValidationError("Clock-out cannot be earlier than clock-in")

        self._attendance.update_clock_out(
            attendance_id=record.attendance_id,
            clock_out=clock_out,
            remarks=(remarks or "").strip() or record.remarks,
        )
        return self._get_or_raise(attendance_id)

    def admin_update_record(
        self,
        attendance_id: int,
        *,
        clock_in: Optional[time],
        clock_out: Optional[time],
        status: AttendanceStatus,
        remarks: Optional[str] = None,
    ) -> AttendanceRecord:
        self._get_or_raise(attendance_id)
        if clock_in and clock_out and clock_out < clock_in:
            raise ValidationError("Clock-out cannot be earlier than clock-in")

        self._attendance.admin_update_record(
            attendance_id=int(attendance_id),
            clock_in=clock_in,
            clock_out=clock_out,
            status=status,
            remarks=(remarks or "").strip() or None,
        )
        return self._get_or_raise(attendance_id)

    def delete_record(self, attendance_id: int) -> bool:
        deleted = self._attendance.delete_by_id(int(attendance_id))
        if deleted:
            logger.info("Deleted attendance record %s", attendance_id)
        return deleted

    def list_for_employee(self, employee_id: int, *, limit: Optional[int] = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_employee(int(employee_id), limit=_clamp_limit(limit))

    def list_all(
        self, *, work_date: Optional[date] = None, limit: Optional[int] = DEFAULT_HISTORY_LIMIT
    ) -> Sequence[AttendanceRecord]:
        """Admin listing, newest first; one day only when ``work_date`` is given."""
        return self._attendance.list_all(work_date=work_date, limit=_clamp_limit(limit))

    def list_for_employee_between(self, employee_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        require_period(start, end)
        return self._attendance.list_for_employee_between(int(employee_id), start, end)

    def _get_or_raise(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise AttendanceNotFound(f"Attendance record not found with ID: {attendance_id}")
        return record
