from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_clock
from ..core.constants import NO_ENTRY_STATUS
from ..core.enums import MemberSource


@dataclass(frozen=True)
class ShiftWindow:
    """The shift leader's own clock-in/clock-out on a job."""

    job_id: str
    leader_id: str
    clock_in: datetime
    clock_out: datetime
    job_name: str = ""

    @property
    def shift_date(self) -> date:
        return self.clock_in.date()

    @property
    def default_clock_in(self) -> str:
        return format_clock(self.clock_in)

    @property
    def default_clock_out(self) -> str:
        return format_clock(self.clock_out)


@dataclass
class CrewMember:
    """One person on the verification roster.

    `edited` is maintained by CrewRoster and always reflects the edited times
    against the baseline entry; callers should not assign it.
    """

    user_id: str
    employee_name: str
    source: MemberSource
    edited_clock_in: str
    edited_clock_out: str
    entry_id: Optional[str] = None
    original_clock_in: Optional[datetime] = None
    original_clock_out: Optional[datetime] = None
    total_hours: Optional[float] = None
    break_minutes: int = 0
    status: str = NO_ENTRY_STATUS
    confirmed: bool = False
    edited: bool = False
    avatar_url: Optional[str] = None

    @property
    def has_time_entry(self) -> bool:
        return self.entry_id is not None

    @property
    def is_new_entry(self) -> bool:
        return not self.has_time_entry

    @property
    def needs_request(self) -> bool:
        return self.confirmed and (self.is_new_entry or (self.edited and self.has_time_entry))

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "employee_name": self.employee_name,
            "source": self.source.value,
            "entry_id": self.entry_id,
            "original_clock_in": format_clock(self.original_clock_in) if self.original_clock_in else None,
            "original_clock_out": format_clock(self.original_clock_out) if self.original_clock_out else None,
            "clock_in": self.edited_clock_in,
            "clock_out": self.edited_clock_out,
            "break_minutes": self.break_minutes,
            "status": self.status,
            "confirmed": self.confirmed,
            "edited": self.edited,
            "has_time_entry": self.has_time_entry,
            "is_new_entry": self.is_new_entry,
            "needs_request": self.needs_request,
            "avatar_url": self.avatar_url,
        }


@dataclass(frozen=True)
class MemberFailure:
    user_id: str
    employee_name: str
    error: str

    def to_dict(self) -> dict:
        return {"user_id": self.user_id, "employee_name": self.employee_name, "error": self.error}


@dataclass
class SubmissionResult:
    """Outcome of committing a roster."""

    requested: int = 0
    succeeded: int = 0
    failed: list[MemberFailure] = field(default_factory=list)

    @property
    def no_changes(self) -> bool:
        """True when the roster was already accurate and nothing was sent."""
        return self.requested == 0

    def to_dict(self) -> dict:
        return {
            "requested": self.requested,
            "succeeded": self.succeeded,
            "failed": [f.to_dict() for f in self.failed],
            "no_changes": self.no_changes,
        }
