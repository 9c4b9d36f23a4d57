"""Fixed-point money helpers.

Every derived amount is rounded half-up to cents on its own; sums are taken
over already-rounded values.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Optional

from ..core.constants import MAX_MONEY, MONEY_QUANTUM, RATE_QUANTUM
from ..core.exceptions import ValidationError

ZERO = Decimal("0")


def to_decimal(value: Any, field_name: str = "amount") -> Decimal:
    """Convert input to Decimal without passing through binary floats."""
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        d = value
    else:
        if isinstance(value, float):
            value = repr(value)
        try:
            d = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError(f"{field_name} is not a valid decimal: {value!r}")
    if not d.is_finite():
        raise ValidationError(f"{field_name} must be a finite number: {value!r}")
    return ensure_money_range(d, field_name)


def ensure_money_range(value: Decimal, field_name: str = "amount") -> Decimal:
    """Reject amounts the DECIMAL(12,2) money columns cannot store."""
    if abs(value) > MAX_MONEY:
        raise ValidationError(f"{field_name} is out of range: {value}")
    return value


def round2(value: Decimal) -> Decimal:
    return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def round4(value: Decimal) -> Decimal:
    return value.quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)


def rate_or_zero(value: Optional[Any]) -> Decimal:
    """Percentages that are missing or negative count as zero."""
    if value is None:
        return ZERO
    d = to_decimal(value, "percentage")
    return d if d > ZERO else ZERO


def sum_money(values: Iterable[Decimal]) -> Decimal:
    return round2(sum(values, ZERO))
