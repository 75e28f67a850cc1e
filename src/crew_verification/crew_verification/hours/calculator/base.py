from __future__ import annotations

from abc import ABC, abstractmethod


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def worked_minutes(self, clock_in_minutes: int, clock_out_minutes: int, break_minutes: int) -> int:
        raise NotImplementedError
