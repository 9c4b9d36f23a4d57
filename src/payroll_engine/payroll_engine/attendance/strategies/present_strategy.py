from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """Clock-in at or before the late cutoff."""

    def decide_clock_in(self, *, clock_in: Optional[time]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
