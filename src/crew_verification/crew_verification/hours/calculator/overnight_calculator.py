from __future__ import annotations

from .base import HoursCalculator

MINUTES_PER_DAY = 24 * 60


class OvernightHoursCalculator(HoursCalculator):
    """Treat a clock-out earlier than clock-in as the next day."""

    def worked_minutes(self, clock_in_minutes: int, clock_out_minutes: int, break_minutes: int) -> int:
        span = clock_out_minutes - clock_in_minutes
        if span < 0:
            span += MINUTES_PER_DAY
        return max(span - int(break_minutes or 0), 0)
