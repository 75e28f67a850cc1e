from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class TimeClockEntry:
    """Domain entity: one clock-in/clock-out record of a worker on a job."""

    entry_id: str
    user_id: str
    employee_name: Optional[str]
    job_id: str
    clock_in: datetime
    clock_out: Optional[datetime]
    total_hours: Optional[float] = None
    break_minutes: int = 0
    status: str = "active"

    @property
    def is_open(self) -> bool:
        return self.clock_out is None
