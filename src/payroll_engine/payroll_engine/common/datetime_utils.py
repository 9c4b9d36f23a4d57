from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_clock_time(value: Optional[str]) -> Optional[time]:
    """Parse HH:MM or HH:MM:SS; empty means no time."""
    v = str(value or "").strip()
    if not v:
        return None
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time (HH:MM): {value!r}")


def to_local(instant: datetime, tz: Optional[str] = None) -> datetime:
    """Convert an aware instant to naive wall-clock time in ``tz``.

    Without a zone the instant is converted to the server's local time.
    """
    local = instant.astimezone(ZoneInfo(tz)) if tz else instant.astimezone()
    return local.replace(tzinfo=None)


def now_local(tz: Optional[str] = None) -> datetime:
    """Current wall-clock time in ``tz`` (server local time when omitted).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return to_local(datetime.now(timezone.utc), tz)


def closure_date_for(now: datetime, closure_time: time) -> date:
    """Work day a closure firing at ``now`` belongs to.

    A run before the day's closure time (a late or redelivered job after
    midnight) still closes the previous day.
    """
    if now.time() >= closure_time:
        return now.date()
    return now.date() - timedelta(days=1)
