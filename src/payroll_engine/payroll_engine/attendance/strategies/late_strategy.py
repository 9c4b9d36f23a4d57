from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Clock-in after the late cutoff, up to the absent cutoff."""

    def __init__(self, late_cutoff: time):
        self._late_cutoff = late_cutoff

    def decide_clock_in(self, *, clock_in: Optional[time]) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.LATE,
            remarks=f"Clocked in at {clock_in:%H:%M}, after {self._late_cutoff:%H:%M}" if clock_in else None,
        )
