from __future__ import annotations

from datetime import date, time
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee_between(self, employee_id: int, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_all(self, *, work_date: Optional[date] = None, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_record(
        self,
        *,
        employee_id: int,
        work_date: date,
        clock_in: Optional[time],
        status: AttendanceStatus,
        remarks: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def create_absent_records(self, *, employee_ids: Iterable[int], work_date: date) -> int:
        """Insert Absent rows, skipping employees that already have a row that day.

        Returns the number of rows actually inserted.
        """

        raise NotImplementedError

    def update_clock_out(self, *, attendance_id: int, clock_out: time, remarks: Optional[str] = None) -> bool:
        raise NotImplementedError

    def admin_update_record(
        self,
        *,
        attendance_id: int,
        clock_in: Optional[time],
        clock_out: Optional[time],
        status: AttendanceStatus,
        remarks: Optional[str] = None,
    ) -> bool:
        """Admin-only override."""

        raise NotImplementedError

    def delete_by_id(self, attendance_id: int) -> bool:
        raise NotImplementedError
