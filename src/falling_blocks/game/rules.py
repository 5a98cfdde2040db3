from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TimingRules:
    fall_interval: float = 0.5  # seconds per gravity step
    soft_drop_interval: float = 0.1  # seconds per gravity step while Down is held
    line_clear_rate: float = 2.0  # animation progress per second

    def gravity_interval(self, soft_drop: bool) -> float:
        return self.soft_drop_interval if soft_drop else self.fall_interval
