from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee-day. (employee_id, work_date) is unique."""

    attendance_id: int
    employee_id: int
    work_date: date
    clock_in: Optional[time]
    clock_out: Optional[time]
    status: AttendanceStatus
    remarks: Optional[str] = None


@dataclass(frozen=True)
class AttendanceOverview:
    """Same-day dashboard counts; present + late + on_leave + absent == total."""

    total: int
    present: int
    late: int
    on_leave: int
    absent: int

    def as_dict(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "late": self.late,
            "on_leave": self.on_leave,
            "absent": self.absent,
        }
