from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_period(start: Optional[date], end: Optional[date], *, label: str = "Period") -> None:
    if start is None or end is None:
        raise ValidationError(f"{label} start and end dates are required")
    if end < start:
        raise ValidationError(f"{label} end date must be on or after the start date")
