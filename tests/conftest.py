from __future__ import annotations

import dataclasses
from datetime import date, datetime, time
from decimal import Decimal

import pytest

from src.payroll_engine.payroll_engine.attendance.model import AttendanceRecord
from src.payroll_engine.payroll_engine.container import wire_container
from src.payroll_engine.payroll_engine.core.config import EngineConfig
from src.payroll_engine.payroll_engine.core.enums import (
    AttendanceStatus,
    EmploymentStatus,
    RequestStatus,
    Role,
)
from src.payroll_engine.payroll_engine.core.exceptions import ValidationError
from src.payroll_engine.payroll_engine.employees.model import Employee
from src.payroll_engine.payroll_engine.leave.model import LeaveRequest


class FakeEmployeesRepo:
    def __init__(self, employees=()):
        self._by_id = {e.employee_id: e for e in employees}

    def add(self, employee: Employee) -> Employee:
        self._by_id[employee.employee_id] = employee
        return employee

    def get_by_id(self, employee_id):
        return self._by_id.get(int(employee_id))

    def list_active(self):
        return [e for _, e in sorted(self._by_id.items()) if e.is_active]


class FakeAttendanceRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, AttendanceRecord] = {}

    def add(self, *, employee_id, work_date, status, clock_in=None, clock_out=None) -> AttendanceRecord:
        rid = self.create_record(employee_id=employee_id, work_date=work_date, clock_in=clock_in, status=status)
        if clock_out:
            self.update_clock_out(attendance_id=rid, clock_out=clock_out)
        return self.rows[rid]

    def get_by_id(self, attendance_id):
        return self.rows.get(int(attendance_id))

    def get_for_employee_and_date(self, employee_id, work_date):
        for r in self.rows.values():
            if r.employee_id == int(employee_id) and r.work_date == work_date:
                return r
        return None

    def list_for_date(self, work_date):
        return [r for r in self.rows.values() if r.work_date == work_date]

    def list_for_employee(self, employee_id, *, limit):
        rows = [r for r in self.rows.values() if r.employee_id == int(employee_id)]
        return sorted(rows, key=lambda r: r.work_date, reverse=True)[:limit]

    def list_for_employee_between(self, employee_id, start_date, end_date):
        rows = [
            r for r in self.rows.values()
            if r.employee_id == int(employee_id) and start_date <= r.work_date <= end_date
        ]
        return sorted(rows, key=lambda r: r.work_date)

    def list_all(self, *, work_date=None, limit):
        rows = [r for r in self.rows.values() if work_date is None or r.work_date == work_date]
        return sorted(rows, key=lambda r: (-r.work_date.toordinal(), r.employee_id))[:limit]

    def create_record(self, *, employee_id, work_date, clock_in, status, remarks=None):
        if self.get_for_employee_and_date(employee_id, work_date):
            raise ValidationError("Attendance already recorded for today")
        rid = self._next_id
        self._next_id += 1
        self.rows[rid] = AttendanceRecord(
            attendance_id=rid,
            employee_id=int(employee_id),
            work_date=work_date,
            clock_in=clock_in,
            clock_out=None,
            status=status,
            remarks=remarks,
        )
        return rid

    def create_absent_records(self, *, employee_ids, work_date):
        inserted = 0
        for eid in employee_ids:
            # INSERT IGNORE: an existing row for the day wins.
            if self.get_for_employee_and_date(eid, work_date):
                continue
            self.create_record(employee_id=eid, work_date=work_date, clock_in=None, status=AttendanceStatus.ABSENT)
            inserted += 1
        return inserted

    def update_clock_out(self, *, attendance_id, clock_out, remarks=None):
        r = self.rows.get(int(attendance_id))
        if not r:
            return False
        self.rows[r.attendance_id] = dataclasses.replace(r, clock_out=clock_out, remarks=remarks)
        return True

    def admin_update_record(self, *, attendance_id, clock_in, clock_out, status, remarks=None):
        r = self.rows.get(int(attendance_id))
        if not r:
            return False
        self.rows[r.attendance_id] = dataclasses.replace(
            r, clock_in=clock_in, clock_out=clock_out, status=status, remarks=remarks
        )
        return True

    def delete_by_id(self, attendance_id):
        return self.rows.pop(int(attendance_id), None) is not None


class FakeLeaveRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, LeaveRequest] = {}

    def approved(self, *, employee_id, start_date, end_date) -> LeaveRequest:
        rid = self.create_leave(
            employee_id=employee_id,
            leave_type="Annual",
            start_date=start_date,
            end_date=end_date,
            reason="Holiday",
            request_date=datetime(2025, 1, 1, 9, 0),
        )
        self.rows[rid] = dataclasses.replace(self.rows[rid], status=RequestStatus.APPROVED, decided_by=99)
        return self.rows[rid]

    def create_leave(self, *, employee_id, leave_type, start_date, end_date, reason, request_date):
        rid = self._next_id
        self._next_id += 1
        self.rows[rid] = LeaveRequest(
            request_id=rid,
            employee_id=int(employee_id),
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=RequestStatus.PENDING,
            request_date=request_date,
        )
        return rid

    def get_leave(self, *, request_id):
        return self.rows.get(int(request_id))

    def list_leave_requests(self, *, status=None, employee_id=None, limit=200):
        rows = [
            lr for lr in self.rows.values()
            if (status is None or lr.status == status) and (employee_id is None or lr.employee_id == employee_id)
        ]
        return rows[:limit]

    def list_approved_between(self, start_date, end_date):
        return [
            lr for lr in self.rows.values()
            if lr.status == RequestStatus.APPROVED and lr.start_date <= end_date and lr.end_date >= start_date
        ]

    def decide_leave(self, *, request_id, status, decided_by, decided_at):
        lr = self.rows.get(int(request_id))
        if not lr or lr.status != RequestStatus.PENDING:
            return False
        self.rows[lr.request_id] = dataclasses.replace(lr, status=status, decided_by=decided_by, decided_at=decided_at)
        return True

    def delete_leave(self, *, request_id):
        return self.rows.pop(int(request_id), None) is not None


class FakePayrollRepo:
    def __init__(self):
        self._next_run_id = 1
        self._next_paycheck_id = 1
        self.runs = {}
        self.save_calls = 0

    def save_draft(self, run, paychecks):
        self.save_calls += 1
        run_id = self._next_run_id
        self._next_run_id += 1
        saved = []
        for p in paychecks:
            saved.append(dataclasses.replace(p, paycheck_id=self._next_paycheck_id, run_id=run_id))
            self._next_paycheck_id += 1
        self.runs[run_id] = dataclasses.replace(run, run_id=run_id, paychecks=tuple(saved))
        return self.runs[run_id]

    def get_run(self, run_id):
        return self.runs.get(int(run_id))

    def list_runs(self):
        return sorted(self.runs.values(), key=lambda r: r.run_id, reverse=True)

    def list_paychecks_for_employee(self, employee_id):
        return [p for run in self.list_runs() for p in run.paychecks if p.employee_id == int(employee_id)]

    def transition(self, run_id, *, from_status, to_status, approved_by=None, approved_at=None):
        run = self.runs.get(int(run_id))
        if not run or run.status != from_status:
            return False
        changes = {"status": to_status, "paychecks": tuple(dataclasses.replace(p, status=to_status) for p in run.paychecks)}
        if approved_by is not None:
            changes.update(approved_by=approved_by, approved_at=approved_at)
        self.runs[run.run_id] = dataclasses.replace(run, **changes)
        return True

    def delete_run(self, run_id, *, allowed_statuses):
        run = self.runs.get(int(run_id))
        if not run or run.status not in tuple(allowed_statuses):
            return False
        del self.runs[run.run_id]
        return True


def _employee(employee_id, *, base="3000.00", tax=None, commission=None, pf=None, active=True, role=Role.STAFF):
    return Employee(
        employee_id=employee_id,
        username=f"user{employee_id}",
        full_name=f"User {employee_id}",
        base_salary=Decimal(base),
        tax_percentage=Decimal(tax) if tax is not None else None,
        commission_percentage=Decimal(commission) if commission is not None else None,
        provident_fund_percentage=Decimal(pf) if pf is not None else None,
        employment_status=EmploymentStatus.ACTIVE if active else EmploymentStatus.INACTIVE,
        role=role,
    )


@pytest.fixture
def engine_config():
    return EngineConfig(late_cutoff=time(8, 30), absent_cutoff=time(14, 0), standard_working_days=22)


@pytest.fixture
def today():
    return date(2025, 3, 14)


@pytest.fixture
def fixed_now(today):
    return datetime.combine(today, time(9, 0))


@pytest.fixture
def employees_repo():
    return FakeEmployeesRepo(
        [
            _employee(1, base="5000.00", role=Role.ADMIN),
            _employee(2, base="5000.00", role=Role.ADMIN),
            _employee(3, base="3000.00", tax="0.10", commission="0.02", pf="0.05"),
            _employee(4, base="2200.00"),
            _employee(5, base="2600.00", active=False),
        ]
    )


@pytest.fixture
def attendance_repo():
    return FakeAttendanceRepo()


@pytest.fixture
def leave_repo():
    return FakeLeaveRepo()


@pytest.fixture
def payroll_repo():
    return FakePayrollRepo()


@pytest.fixture
def container(engine_config, employees_repo, attendance_repo, leave_repo, payroll_repo):
    return wire_container(
        engine_config=engine_config,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        payroll_repo=payroll_repo,
    )



@pytest.fixture
def make_employee():
    return _employee
