from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import EmploymentStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, username, full_name, base_salary, tax_percentage,
    commission_percentage, provident_fund_percentage, employment_status, role
"""


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        username=r["username"],
        full_name=r["full_name"],
        base_salary=r["base_salary"],
        tax_percentage=r.get("tax_percentage"),
        commission_percentage=r.get("commission_percentage"),
        provident_fund_percentage=r.get("provident_fund_percentage"),
        employment_status=EmploymentStatus(r["employment_status"]),
        role=Role(r["role"]),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE employment_status=%s ORDER BY employee_id",
                (EmploymentStatus.ACTIVE.value,),
            )
            return [_row_to_employee(r) for r in fetchall(cur)]
