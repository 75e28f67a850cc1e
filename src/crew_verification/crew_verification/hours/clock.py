from __future__ import annotations

from datetime import time
from typing import Optional

from ..common.validators import require_clock, require_non_negative_int
from .calculator.base import HoursCalculator
from .calculator.overnight_calculator import OvernightHoursCalculator
from .calculator.standard_calculator import SameDayHoursCalculator

_DEFAULT_CALCULATOR = SameDayHoursCalculator()


def parse_clock(value: str) -> int:
    """Parse a 24-hour HH:MM string into minutes since midnight."""
    hours, minutes = require_clock(value, "Time").split(":")
    return int(hours) * 60 + int(minutes)


def calculator_for(*, allow_overnight: bool) -> HoursCalculator:
    if allow_overnight:
        return OvernightHoursCalculator()
    return SameDayHoursCalculator()


def compute_hours(
    clock_in: str,
    clock_out: str,
    break_minutes: int,
    *,
    calculator: Optional[HoursCalculator] = None,
) -> float:
    """Worked hours between two HH:MM values minus the break, never negative."""
    calc = calculator or _DEFAULT_CALCULATOR
    minutes = calc.worked_minutes(
        parse_clock(clock_in),
        parse_clock(clock_out),
        require_non_negative_int(break_minutes, "Break minutes"),
    )
    return minutes / 60


def clock_to_time(value: str) -> time:
    minutes = parse_clock(value)
    return time(hour=minutes // 60, minute=minutes % 60)
