from datetime import date, time

import pytest
from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from src.payroll_engine.payroll_engine.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.payroll_engine.payroll_engine.core.enums import AttendanceStatus
from src.payroll_engine.payroll_engine.core.exceptions import ValidationError


class _Cursor:
    def __init__(self, error=None):
        self._error = error
        self.lastrowid = 7
        self.executed = []

    def execute(self, sql, params=()):
        self.executed.append((sql, params))
        if self._error is not None:
            raise self._error

    def fetchall(self):
        return []

    def close(self):
        pass


class _Connection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class _ConnectionFactory:
    def __init__(self, error=None):
        self.cursor = _Cursor(error)
        self.conn = _Connection(self.cursor)

    def connect(self):
        return self.conn


def _clock_in(repo):
    return repo.create_record(
        employee_id=3, work_date=date(2025, 3, 14), clock_in=time(8, 0), status=AttendanceStatus.PRESENT
    )


def test_create_record_returns_new_id():
    factory = _ConnectionFactory()

    assert _clock_in(MySQLAttendanceRepository(factory)) == 7
    assert factory.conn.committed


def test_concurrent_duplicate_clock_in_is_a_validation_error():
    duplicate = IntegrityError(msg="Duplicate entry '3-2025-03-14'", errno=errorcode.ER_DUP_ENTRY)
    factory = _ConnectionFactory(duplicate)

    with pytest.raises(ValidationError, match="already recorded"):
        _clock_in(MySQLAttendanceRepository(factory))

    assert factory.conn.rolled_back
    assert not factory.conn.committed


def test_other_integrity_errors_propagate():
    missing_employee = IntegrityError(msg="Cannot add or update a child row", errno=errorcode.ER_NO_REFERENCED_ROW_2)
    factory = _ConnectionFactory(missing_employee)

    with pytest.raises(IntegrityError):
        _clock_in(MySQLAttendanceRepository(factory))


def test_list_all_filters_by_day_and_limits():
    factory = _ConnectionFactory()
    repo = MySQLAttendanceRepository(factory)

    repo.list_all(limit=50)
    repo.list_all(work_date=date(2025, 3, 14), limit=10)

    (all_sql, all_params), (day_sql, day_params) = factory.cursor.executed
    assert "WHERE" not in all_sql and all_params == (50,)
    assert "WHERE work_date=%s" in day_sql and day_params == (date(2025, 3, 14), 10)
