from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import RequestStatus, RequestType


@dataclass(frozen=True)
class ShiftCorrectionPayload:
    """What a crew leader submits for one crew member."""

    user_id: str
    work_date: date
    requested_clock_in: time
    requested_clock_out: time
    notes: str
    submitted_by: str
    break_minutes: int = 0
    job_name: Optional[str] = None


@dataclass(frozen=True)
class ShiftCorrectionRequest:
    request_id: int
    user_id: str
    work_date: date
    requested_clock_in: Optional[time]
    requested_clock_out: Optional[time]
    notes: Optional[str]
    status: RequestStatus
    created_at: datetime
    submitted_by: Optional[str] = None
    break_minutes: int = 0
    job_name: Optional[str] = None
    request_type: RequestType = RequestType.SHIFT
    decided_by: Optional[str] = None
    decided_at: Optional[datetime] = None
    admin_note: Optional[str] = None
