from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..core.config import EngineConfig
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy, StatusDecision
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass(frozen=True)
class AttendanceStrategyFactory:
    """Factory Pattern: choose the classification strategy from the configured cutoffs.

    Cutoffs are validated by ``EngineConfig``; this class never sees invalid ones.
    """

    late_cutoff: time
    absent_cutoff: time

    @classmethod
    def from_config(cls, config: EngineConfig) -> "AttendanceStrategyFactory":
        return cls(late_cutoff=config.late_cutoff, absent_cutoff=config.absent_cutoff)

    def for_clock_in(self, clock_in: Optional[time]) -> AttendanceStrategy:
        if clock_in is None or clock_in > self.absent_cutoff:
            return AbsentStrategy()
        if clock_in <= self.late_cutoff:
            return PresentStrategy()
        return LateStrategy(self.late_cutoff)

    def classify(self, clock_in: Optional[time]) -> StatusDecision:
        return self.for_clock_in(clock_in).decide_clock_in(clock_in=clock_in)
