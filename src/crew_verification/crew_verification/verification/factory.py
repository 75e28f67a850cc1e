from __future__ import annotations

from dataclasses import dataclass

from ..attendance.model import TimeClockEntry
from ..common.datetime_utils import format_clock
from ..core.constants import ADDED_STATUS, NO_ENTRY_STATUS
from ..core.enums import MemberSource
from .model import CrewMember, ShiftWindow


@dataclass
class CrewMemberFactory:
    """Factory Pattern: build roster members with their source-specific defaults."""

    def from_entry(
        self,
        entry: TimeClockEntry,
        *,
        name: str,
        source: MemberSource,
        window: ShiftWindow,
    ) -> CrewMember:
        # An entry is direct evidence of presence, so it starts confirmed.
        return CrewMember(
            user_id=entry.user_id,
            employee_name=name,
            source=source,
            entry_id=entry.entry_id,
            original_clock_in=entry.clock_in,
            original_clock_out=entry.clock_out,
            edited_clock_in=format_clock(entry.clock_in),
            edited_clock_out=window.default_clock_out if entry.is_open else format_clock(entry.clock_out),
            total_hours=entry.total_hours,
            break_minutes=int(entry.break_minutes or 0),
            status=entry.status,
            confirmed=True,
        )

    def assigned_without_entry(self, *, user_id: str, name: str, window: ShiftWindow) -> CrewMember:
        return CrewMember(
            user_id=user_id,
            employee_name=name,
            source=MemberSource.ASSIGNED,
            edited_clock_in=window.default_clock_in,
            edited_clock_out=window.default_clock_out,
            status=NO_ENTRY_STATUS,
            confirmed=False,
        )

    def added(self, *, user_id: str, name: str, window: ShiftWindow) -> CrewMember:
        return CrewMember(
            user_id=user_id,
            employee_name=name,
            source=MemberSource.ADDED,
            edited_clock_in=window.default_clock_in,
            edited_clock_out=window.default_clock_out,
            status=ADDED_STATUS,
            confirmed=True,
            edited=True,
        )
