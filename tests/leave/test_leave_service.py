from datetime import timedelta

import pytest

from src.payroll_engine.payroll_engine.core.enums import RequestStatus
from src.payroll_engine.payroll_engine.core.exceptions import (
    EmployeeNotFound,
    LeaveRequestNotFound,
    SeparationOfDutiesViolation,
    ValidationError,
)


@pytest.fixture
def submitted(container, today, fixed_now):
    return container.leave_service.submit_leave(
        employee_id=3,
        leave_type="Annual",
        start_date=today,
        end_date=today + timedelta(days=2),
        reason="Family trip",
        now=fixed_now,
    )


def test_submit_leave_is_pending(submitted):
    assert submitted.status == RequestStatus.PENDING
    assert submitted.employee_id == 3


def test_submit_leave_validates_input(container, today):
    svc = container.leave_service

    with pytest.raises(ValidationError):
        svc.submit_leave(employee_id=3, leave_type="Annual", start_date=today, end_date=today - timedelta(days=1), reason="x")
    with pytest.raises(ValidationError):
        svc.submit_leave(employee_id=3, leave_type="  ", start_date=today, end_date=today, reason="x")
    with pytest.raises(ValidationError):
        svc.submit_leave(employee_id=3, leave_type="Annual", start_date=None, end_date=today, reason="x")
    with pytest.raises(EmployeeNotFound):
        svc.submit_leave(employee_id=404, leave_type="Annual", start_date=today, end_date=today, reason="x")


def test_approve_leave(container, submitted, fixed_now):
    approved = container.leave_service.approve_leave(request_id=submitted.request_id, admin_id=1, now=fixed_now)

    assert approved.status == RequestStatus.APPROVED
    assert approved.decided_by == 1
    assert approved.decided_at == fixed_now


def test_reject_leave(container, submitted):
    rejected = container.leave_service.reject_leave(request_id=submitted.request_id, admin_id=2)

    assert rejected.status == RequestStatus.REJECTED


def test_leave_cannot_be_decided_twice(container, submitted):
    svc = container.leave_service
    svc.approve_leave(request_id=submitted.request_id, admin_id=1)

    with pytest.raises(ValidationError):
        svc.reject_leave(request_id=submitted.request_id, admin_id=2)


def test_admin_cannot_decide_own_leave(container, today):
    svc = container.leave_service
    own = svc.submit_leave(employee_id=1, leave_type="Sick", start_date=today, end_date=today, reason="Flu")

    with pytest.raises(SeparationOfDutiesViolation):
        svc.approve_leave(request_id=own.request_id, admin_id=1)


def test_decide_missing_request(container):
    with pytest.raises(LeaveRequestNotFound):
        container.leave_service.approve_leave(request_id=42, admin_id=1)


def test_listing_and_delete(container, submitted):
    svc = container.leave_service

    assert [lr.request_id for lr in svc.list_my_leave(3)] == [submitted.request_id]
    assert svc.list_my_leave(4) == []
    assert len(svc.list_all_leave(status=RequestStatus.PENDING)) == 1
    assert svc.list_all_leave(status=RequestStatus.APPROVED) == []

    assert svc.delete_leave(submitted.request_id) is True
    assert svc.delete_leave(submitted.request_id) is False


def test_approved_leave_feeds_absence_closure(container, attendance_repo, submitted, today):
    container.leave_service.approve_leave(request_id=submitted.request_id, admin_id=1)

    container.absence_closer.run_daily_absence_closure(today=today + timedelta(days=1))

    assert attendance_repo.get_for_employee_and_date(3, today + timedelta(days=1)) is None
    assert attendance_repo.get_for_employee_and_date(4, today + timedelta(days=1)) is not None
