from __future__ import annotations

from datetime import date, time
from typing import Iterable, Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT attendance_id, employee_id, work_date, clock_in, clock_out, status, remarks
    FROM attendance_records
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        clock_in=normalize_mysql_time(r.get("clock_in")),
        clock_out=normalize_mysql_time(r.get("clock_out")),
        status=AttendanceStatus(r["status"]),
        remarks=r.get("remarks"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE employee_id=%s AND work_date=%s", (int(employee_id), work_date))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE work_date=%s ORDER BY employee_id", (work_date,))
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int, *, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE employee_id=%s ORDER BY work_date DESC LIMIT %s",
                (int(employee_id), int(limit)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_employee_between(self, employee_id: int, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE employee_id=%s AND work_date BETWEEN %s AND %s ORDER BY work_date",
                (int(employee_id), start_date, end_date),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_all(self, *, work_date: Optional[date] = None, limit: int) -> Sequence[AttendanceRecord]:
        where, params = "", []
        if work_date is not None:
            where, params = " WHERE work_date=%s", [work_date]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + where + " ORDER BY work_date DESC, employee_id LIMIT %s",
                tuple(params + [int(limit)]),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def create_record(
        self,
        *,
        employee_id: int,
        work_date: date,
        clock_in: Optional[time],
        status: AttendanceStatus,
        remarks: Optional[str] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, work_date, clock_in, status, remarks)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (int(employee_id), work_date, clock_in, status.value, remarks),
                )
                return int(cur.lastrowid)
        except IntegrityError as exc:
            # A concurrent clock-in won the uq_attendance_employee_day race.
            if exc.errno == errorcode.ER_DUP_ENTRY:
                raise ValidationError("Attendance already recorded for today")
            raise

    def create_absent_records(self, *, employee_ids: Iterable[int], work_date: date) -> int:
        rows = [(int(eid), work_date, AttendanceStatus.ABSENT.value) for eid in employee_ids]
        if not rows:
            return 0
        # uq_attendance_employee_day turns a concurrent duplicate into a no-op.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT IGNORE INTO attendance_records(employee_id, work_date, status)
                VALUES(%s,%s,%s)
                """,
                rows,
            )
            return int(cur.rowcount or 0)

    def update_clock_out(self, *, attendance_id: int, clock_out: time, remarks: Optional[str] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET clock_out=%s, remarks=%s WHERE attendance_id=%s",
                (clock_out, remarks, int(attendance_id)),
            )
            return cur.rowcount > 0

    def admin_update_record(
        self,
        *,
        attendance_id: int,
        clock_in: Optional[time],
        clock_out: Optional[time],
        status: AttendanceStatus,
        remarks: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_in=%s, clock_out=%s, status=%s, remarks=%s
                WHERE attendance_id=%s
                """,
                (clock_in, clock_out, status.value, remarks, int(attendance_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            return cur.rowcount > 0
