import pytest

from src.crew_verification.crew_verification.core.exceptions import ValidationError
from src.crew_verification.crew_verification.hours.calculator.overnight_calculator import OvernightHoursCalculator
from src.crew_verification.crew_verification.hours.calculator.standard_calculator import SameDayHoursCalculator
from src.crew_verification.crew_verification.hours.clock import (
    calculator_for,
    clock_to_time,
    compute_hours,
    parse_clock,
)


def test_compute_hours_subtracts_break():
    assert compute_hours("09:00", "17:00", 30) == 7.5


def test_compute_hours_without_break():
    assert compute_hours("08:00", "16:00", 0) == 8.0


def test_break_longer_than_shift_is_zero():
    assert compute_hours("09:00", "09:30", 45) == 0


def test_same_day_calculator_clamps_overnight_span():
    assert compute_hours("22:00", "06:00", 0) == 0


def test_overnight_calculator_rolls_to_next_day():
    assert compute_hours("22:00", "06:00", 30, calculator=OvernightHoursCalculator()) == 7.5


def test_overnight_calculator_leaves_same_day_span_alone():
    assert OvernightHoursCalculator().worked_minutes(9 * 60, 17 * 60, 60) == 7 * 60


def test_calculator_for_picks_strategy():
    assert isinstance(calculator_for(allow_overnight=False), SameDayHoursCalculator)
    assert isinstance(calculator_for(allow_overnight=True), OvernightHoursCalculator)


@pytest.mark.parametrize("value", ["", "9:00", "24:00", "12:60", "noon", None])
def test_parse_clock_rejects_bad_values(value):
    with pytest.raises(ValidationError):
        parse_clock(value)


def test_negative_break_is_rejected():
    with pytest.raises(ValidationError):
        compute_hours("09:00", "17:00", -5)


def test_clock_to_time():
    t = clock_to_time("07:45")
    assert (t.hour, t.minute) == (7, 45)
