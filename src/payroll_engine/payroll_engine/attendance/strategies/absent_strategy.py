from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """No clock-in, or clock-in after the absent cutoff."""

    def decide_clock_in(self, *, clock_in: Optional[time]) -> StatusDecision:
        if clock_in is None:
            return StatusDecision(status=AttendanceStatus.ABSENT)
        return StatusDecision(status=AttendanceStatus.ABSENT, remarks=f"Clocked in at {clock_in:%H:%M}, past absent cutoff")
