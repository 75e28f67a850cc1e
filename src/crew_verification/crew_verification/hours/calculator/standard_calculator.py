from __future__ import annotations

from .base import HoursCalculator


class SameDayHoursCalculator(HoursCalculator):
    """Standard rule: (out - in) - break_minutes, not below 0.

    Clock-out is assumed to be on the same day as clock-in, so a span that
    crosses midnight comes out as 0.
    """

    def worked_minutes(self, clock_in_minutes: int, clock_out_minutes: int, break_minutes: int) -> int:
        minutes = clock_out_minutes - clock_in_minutes - int(break_minutes or 0)
        return max(minutes, 0)
