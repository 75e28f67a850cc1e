from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, Optional

from ..common.datetime_utils import format_clock
from ..common.validators import require_clock, require_non_negative_int
from ..core.constants import UNKNOWN_NAME
from ..core.enums import MemberSource, TimeField
from ..core.exceptions import ValidationError
from ..directory.repository import DirectoryRepository
from ..hours.calculator.base import HoursCalculator
from ..hours.clock import compute_hours
from .factory import CrewMemberFactory
from .model import CrewMember, ShiftWindow

logger = logging.getLogger(__name__)

RosterListener = Callable[["CrewRoster"], None]


class CrewRoster:
    """In-memory roster owned by one verification session.

    All mutations go through the methods below; each one notifies the
    subscribed listeners afterwards so a presentation layer can refresh.
    """

    def __init__(
        self,
        window: ShiftWindow,
        members: Iterable[CrewMember] = (),
        *,
        directory: Optional[DirectoryRepository] = None,
        calculator: Optional[HoursCalculator] = None,
        factory: Optional[CrewMemberFactory] = None,
    ):
        self.window = window
        self._directory = directory
        self._calculator = calculator
        self._factory = factory or CrewMemberFactory()
        self._members: dict[str, CrewMember] = {}
        self._listeners: list[RosterListener] = []

        for member in members:
            if member.user_id in self._members:
                raise ValidationError(f"Duplicate crew member {member.user_id}")
            self._members[member.user_id] = member

    def __iter__(self) -> Iterator[CrewMember]:
        return iter(list(self._members.values()))

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._members

    @property
    def members(self) -> list[CrewMember]:
        return list(self._members.values())

    def get(self, user_id: str) -> CrewMember:
        member = self._members.get(user_id)
        if member is None:
            raise ValidationError(f"Crew member {user_id} is not on this roster")
        return member

    def by_source(self, source: MemberSource) -> list[CrewMember]:
        return [m for m in self._members.values() if m.source == source]

    @property
    def confirmed_count(self) -> int:
        return sum(1 for m in self._members.values() if m.confirmed)

    @property
    def pending_request_count(self) -> int:
        return sum(1 for m in self._members.values() if m.needs_request)

    def hours_for(self, user_id: str) -> float:
        m = self.get(user_id)
        return compute_hours(m.edited_clock_in, m.edited_clock_out, m.break_minutes, calculator=self._calculator)

    # -------- Listeners --------
    def subscribe(self, listener: RosterListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # -------- Edit tracking --------
    def baseline_clock_in(self, member: CrewMember) -> Optional[str]:
        if not member.original_clock_in:
            return None
        return format_clock(member.original_clock_in)

    def baseline_clock_out(self, member: CrewMember) -> Optional[str]:
        if not member.has_time_entry:
            return None
        # Open entries were defaulted to the leader's clock-out.
        if member.original_clock_out:
            return format_clock(member.original_clock_out)
        return self.window.default_clock_out

    def _recompute_edited(self, member: CrewMember) -> None:
        if member.has_time_entry and member.original_clock_in:
            member.edited = (
                member.edited_clock_in != self.baseline_clock_in(member)
                or member.edited_clock_out != self.baseline_clock_out(member)
            )
        else:
            # Without a baseline anything committed is new.
            member.edited = True

    def edit_time(self, user_id: str, field: TimeField | str, value: str) -> CrewMember:
        member = self.get(user_id)
        try:
            time_field = TimeField(field)
        except ValueError:
            raise ValidationError(f"Unknown time field: {field!r}")

        clock = require_clock(value, "Clock in" if time_field == TimeField.CLOCK_IN else "Clock out")
        if time_field == TimeField.CLOCK_IN:
            member.edited_clock_in = clock
        else:
            member.edited_clock_out = clock

        self._recompute_edited(member)
        self._changed()
        return member

    def set_break_minutes(self, user_id: str, minutes: int) -> CrewMember:
        member = self.get(user_id)
        member.break_minutes = require_non_negative_int(minutes, "Break minutes")
        self._changed()
        return member

    # -------- Confirmation --------
    def toggle_confirmed(self, user_id: str) -> CrewMember:
        member = self.get(user_id)
        member.confirmed = not member.confirmed
        self._changed()
        return member

    # -------- Manual addition --------
    def _lookup_name(self, user_id: str) -> str:
        if not self._directory:
            return UNKNOWN_NAME
        try:
            entry = self._directory.get_by_user_id(user_id)
        except Exception:
            logger.exception("Directory lookup failed for %s", user_id)
            return UNKNOWN_NAME
        return entry.display_name if entry else UNKNOWN_NAME

    def add_members(self, user_ids: Iterable[str]) -> int:
        """Add people the leader says were on site. Returns how many were new."""
        added = 0
        for user_id in user_ids:
            if not user_id or user_id == self.window.leader_id or user_id in self._members:
                continue
            self._members[user_id] = self._factory.added(
                user_id=user_id,
                name=self._lookup_name(user_id),
                window=self.window,
            )
            added += 1

        if added:
            self._changed()
        return added

    def to_dict(self) -> dict:
        def rows(source: MemberSource) -> list[dict]:
            out = []
            for m in self.by_source(source):
                row = m.to_dict()
                row["hours"] = round(self.hours_for(m.user_id), 2)
                out.append(row)
            return out

        return {
            "job_id": self.window.job_id,
            "job_name": self.window.job_name,
            "shift_date": self.window.shift_date.isoformat(),
            "leader_clock_in": self.window.default_clock_in,
            "leader_clock_out": self.window.default_clock_out,
            "assigned": rows(MemberSource.ASSIGNED),
            "attended": rows(MemberSource.ATTENDED),
            "added": rows(MemberSource.ADDED),
            "confirmed_count": self.confirmed_count,
            "pending_request_count": self.pending_request_count,
        }
