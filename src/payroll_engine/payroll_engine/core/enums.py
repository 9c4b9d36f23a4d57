from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Session role, checked once at the HTTP boundary."""

    ADMIN = "admin"
    STAFF = "staff"


class EmploymentStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class AttendanceStatus(str, Enum):
    """Daily attendance status stored in the database."""

    PRESENT = "Present"
    LATE = "Late"
    ABSENT = "Absent"
    ON_LEAVE = "OnLeave"

    @property
    def is_worked(self) -> bool:
        return self in (AttendanceStatus.PRESENT, AttendanceStatus.LATE)


class RequestStatus(str, Enum):
    """Leave request approval flow."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class PayrollStatus(str, Enum):
    """Payroll run lifecycle: DRAFT -> APPROVED -> PAID."""

    DRAFT = "DRAFT"
    APPROVED = "APPROVED"
    PAID = "PAID"
