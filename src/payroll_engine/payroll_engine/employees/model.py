from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.enums import EmploymentStatus, Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee and the compensation parameters payroll reads.

    Percentages are fractions (0.10 == 10%).
    """

    employee_id: int
    username: str
    full_name: str
    base_salary: Decimal
    tax_percentage: Optional[Decimal] = None
    commission_percentage: Optional[Decimal] = None
    provident_fund_percentage: Optional[Decimal] = None
    employment_status: EmploymentStatus = EmploymentStatus.ACTIVE
    role: Role = Role.STAFF

    @property
    def is_active(self) -> bool:
        return self.employment_status == EmploymentStatus.ACTIVE
