from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .constants import (
    DEFAULT_ABSENT_CUTOFF,
    DEFAULT_CLOSURE_TIME,
    DEFAULT_LATE_CUTOFF,
    DEFAULT_STANDARD_WORKING_DAYS,
    DEFAULT_TIMEZONE,
)
from .exceptions import ConfigurationError


def _parse_clock(value: Any, name: str) -> time:
    if isinstance(value, time):
        return value
    try:
        return datetime.strptime(str(value).strip(), "%H:%M").time()
    except ValueError:
        raise ConfigurationError(f"{name} must be HH:MM, got {value!r}")


def _parse_days(value: Any) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ConfigurationError(f"STANDARD_WORKING_DAYS must be a whole number, got {value!r}")


@dataclass(frozen=True)
class EngineConfig:
    """Immutable engine settings, built once at startup and passed to components."""

    late_cutoff: time
    absent_cutoff: time
    standard_working_days: int = DEFAULT_STANDARD_WORKING_DAYS
    closure_time: time = time(23, 59)
    timezone: str = DEFAULT_TIMEZONE

    def __post_init__(self):
        if self.late_cutoff is None or self.absent_cutoff is None:
            raise ConfigurationError("Attendance cutoffs must be configured")
        if self.absent_cutoff <= self.late_cutoff:
            raise ConfigurationError("ABSENT_CUTOFF must be later than LATE_CUTOFF")
        if int(self.standard_working_days) <= 0:
            raise ConfigurationError("STANDARD_WORKING_DAYS must be positive")
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ConfigurationError(f"Unknown TIMEZONE: {self.timezone!r}")

    @classmethod
    def from_settings(cls, settings) -> "EngineConfig":
        """Build from a settings module (see ``config/``)."""

        return cls(
            late_cutoff=_parse_clock(getattr(settings, "LATE_CUTOFF", DEFAULT_LATE_CUTOFF), "LATE_CUTOFF"),
            absent_cutoff=_parse_clock(getattr(settings, "ABSENT_CUTOFF", DEFAULT_ABSENT_CUTOFF), "ABSENT_CUTOFF"),
            standard_working_days=_parse_days(getattr(settings, "STANDARD_WORKING_DAYS", DEFAULT_STANDARD_WORKING_DAYS)),
            closure_time=_parse_clock(getattr(settings, "CLOSURE_TIME", DEFAULT_CLOSURE_TIME), "CLOSURE_TIME"),
            timezone=str(getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)),
        )
