from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty, require_period
from ..core.enums import RequestStatus
from ..core.exceptions import (
    EmployeeNotFound,
    LeaveRequestNotFound,
    SeparationOfDutiesViolation,
    ValidationError,
)
from ..employees.repository import EmployeeRepository
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    """Submit leave, and let a different admin approve or reject it once."""

    def __init__(self, leave: LeaveRepository, employees: EmployeeRepository, *, timezone: Optional[str] = None):
        self._leave = leave
        self._employees = employees
        self._timezone = timezone

    def submit_leave(
        self,
        *,
        employee_id: int,
        leave_type: str,
        start_date: Optional[date],
        end_date: Optional[date],
        reason: str,
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        require_period(start_date, end_date, label="Leave")
        leave_type = require_non_empty(leave_type, "Leave type")
        reason = require_non_empty(reason, "Reason")
        if not self._employees.get_by_id(int(employee_id)):
            raise EmployeeNotFound(employee_id)

        request_id = self._leave.create_leave(
            employee_id=int(employee_id),
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            request_date=now or now_local(self._timezone),
        )
        return self._get_or_raise(request_id)

    def approve_leave(self, *, request_id: int, admin_id: int, now: Optional[datetime] = None) -> LeaveRequest:
        return self._decide(request_id=request_id, admin_id=admin_id, status=RequestStatus.APPROVED, now=now)

    def reject_leave(self, *, request_id: int, admin_id: int, now: Optional[datetime] = None) -> LeaveRequest:
        return self._decide(request_id=request_id, admin_id=admin_id, status=RequestStatus.REJECTED, now=now)

    def _decide(self, *, request_id: int, admin_id: int, status: RequestStatus, now: Optional[datetime]) -> LeaveRequest:
        req = self._get_or_raise(request_id)
        if req.employee_id == int(admin_id):
            raise SeparationOfDutiesViolation("An admin cannot decide their own leave request")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Leave request has already been decided")

        ok = self._leave.decide_leave(
            request_id=int(request_id),
            status=status,
            decided_by=int(admin_id),
            decided_at=now or now_local(self._timezone),
        )
        if not ok:
            raise ValidationError("Leave request has already been decided")

        logger.info("Leave request %s %s by %s", request_id, status.value.lower(), admin_id)
        return self._get_or_raise(request_id)

    def list_my_leave(self, employee_id: int) -> Sequence[LeaveRequest]:
        return self._leave.list_leave_requests(employee_id=int(employee_id))

    def list_all_leave(self, *, status: Optional[RequestStatus] = None) -> Sequence[LeaveRequest]:
        return self._leave.list_leave_requests(status=status)

    def delete_leave(self, request_id: int) -> bool:
        return self._leave.delete_leave(request_id=int(request_id))

    def _get_or_raise(self, request_id: int) -> LeaveRequest:
        req = self._leave.get_leave(request_id=int(request_id))
        if not req:
            raise LeaveRequestNotFound(f"Leave request not found with ID: {request_id}")
        return req
