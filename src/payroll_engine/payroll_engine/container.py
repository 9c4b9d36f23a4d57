from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.closure import DailyAbsenceCloser
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.overview import AttendanceOverviewService
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.config import EngineConfig
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.repository import LeaveRepository
from .leave.service import LeaveService
from .payroll.calculator.detail_calculator import DetailPaycheckCalculator
from .payroll.calculator.prorated_calculator import ProratedPaycheckCalculator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    engine_config: EngineConfig

    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    leave_repo: LeaveRepository
    payroll_repo: PayrollRepository

    attendance_service: AttendanceService
    absence_closer: DailyAbsenceCloser
    overview_service: AttendanceOverviewService
    leave_service: LeaveService
    payroll_service: PayrollService


def wire_container(
    *,
    engine_config: EngineConfig,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    leave_repo: LeaveRepository,
    payroll_repo: PayrollRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build every service on top of the given repositories."""
    tz = engine_config.timezone
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        strategy_factory=AttendanceStrategyFactory.from_config(engine_config),
        timezone=tz,
    )
    absence_closer = DailyAbsenceCloser(attendance_repo, employees_repo, leave_repo, timezone=tz)
    overview_service = AttendanceOverviewService(attendance_repo, employees_repo, leave_repo, timezone=tz)
    leave_service = LeaveService(leave_repo, employees_repo, timezone=tz)
    payroll_service = PayrollService(
        payroll_repo,
        employees_repo,
        attendance_repo,
        calculator=ProratedPaycheckCalculator(engine_config.standard_working_days),
        detail_calculator=DetailPaycheckCalculator(),
        timezone=tz,
    )

    return Container(
        conn=conn,
        engine_config=engine_config,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        payroll_repo=payroll_repo,
        attendance_service=attendance_service,
        absence_closer=absence_closer,
        overview_service=overview_service,
        leave_service=leave_service,
        payroll_service=payroll_service,
    )


def build_container(*, db_config: dict, engine_config: EngineConfig) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        engine_config=engine_config,
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leave_repo=MySQLLeaveRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        conn=conn,
    )
