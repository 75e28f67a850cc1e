from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from src.crew_verification.crew_verification.assignments.model import Assignment
from src.crew_verification.crew_verification.attendance.model import TimeClockEntry
from src.crew_verification.crew_verification.core.enums import MemberSource
from src.crew_verification.crew_verification.directory.model import DirectoryEntry
from src.crew_verification.crew_verification.verification.aggregator import RosterAggregator, overlaps_window
from src.crew_verification.crew_verification.verification.model import ShiftWindow

DAY = (2026, 3, 2)


def at(hh: int, mm: int = 0) -> datetime:
    return datetime(*DAY, hh, mm)


WINDOW = ShiftWindow(job_id="J-1", job_name="Dock repair", leader_id="lead", clock_in=at(8), clock_out=at(16))


def entry(user_id: str, clock_in: datetime, clock_out: Optional[datetime], *, entry_id: str = "", name: str = "") -> TimeClockEntry:
    return TimeClockEntry(
        entry_id=entry_id or f"e-{user_id}",
        user_id=user_id,
        employee_name=name or user_id.upper(),
        job_id="J-1",
        clock_in=clock_in,
        clock_out=clock_out,
    )


@dataclass
class InMemoryAssignments:
    rows: list[Assignment] = field(default_factory=list)
    fail: bool = False

    def list_for_job(self, *, job_id, exclude_user_id):
        if self.fail:
            raise RuntimeError("assignments offline")
        return [a for a in self.rows if a.user_id != exclude_user_id]


@dataclass
class InMemoryTimeClock:
    rows: list[TimeClockEntry] = field(default_factory=list)
    fail: bool = False

    def list_clocked_in_before(self, *, job_id, exclude_user_id, before):
        if self.fail:
            raise RuntimeError("time clock offline")
        return sorted(
            (e for e in self.rows if e.job_id == job_id and e.user_id != exclude_user_id and e.clock_in <= before),
            key=lambda e: e.clock_in,
        )


@dataclass
class InMemoryDirectory:
    avatars: dict[str, str] = field(default_factory=dict)
    fail: bool = False

    def get_by_user_id(self, user_id):
        return DirectoryEntry(user_id=user_id, email=f"{user_id}@example.com")

    def list_active(self):
        return []

    def list_avatars(self, user_ids):
        if self.fail:
            raise RuntimeError("profiles offline")
        return {u: self.avatars[u] for u in user_ids if u in self.avatars}


def build(assignments=None, time_clock=None, directory=None, now=at(16, 30)):
    aggregator = RosterAggregator(
        assignments or InMemoryAssignments(),
        time_clock or InMemoryTimeClock(),
        directory or InMemoryDirectory(),
        max_workers=2,
        clock=lambda: now,
    )
    return aggregator.build(WINDOW)


def test_assigned_and_attended_member_appears_once_as_assigned():
    members = build(
        InMemoryAssignments([Assignment(user_id="a", full_name="Ana")]),
        InMemoryTimeClock([entry("a", at(8), at(16))]),
    )

    assert [m.user_id for m in members] == ["a"]
    assert members[0].source == MemberSource.ASSIGNED
    assert members[0].employee_name == "Ana"
    assert members[0].entry_id == "e-a"


def test_member_with_entry_starts_confirmed_and_clean():
    [member] = build(
        InMemoryAssignments([Assignment(user_id="a", full_name="Ana")]),
        InMemoryTimeClock([entry("a", at(8, 5), at(15, 55))]),
    )

    assert member.confirmed is True
    assert member.edited is False
    assert (member.edited_clock_in, member.edited_clock_out) == ("08:05", "15:55")


def test_assigned_without_entry_defaults_to_leader_window_unconfirmed():
    [member] = build(InMemoryAssignments([Assignment(user_id="b", full_name=None, email="b@example.com")]))

    assert member.confirmed is False
    assert member.has_time_entry is False
    assert member.employee_name == "b@example.com"
    assert (member.edited_clock_in, member.edited_clock_out) == ("08:00", "16:00")


def test_unassigned_attendee_is_listed_as_attended():
    members = build(time_clock=InMemoryTimeClock([entry("c", at(9), at(12), name="Cam")]))

    assert [(m.user_id, m.source) for m in members] == [("c", MemberSource.ATTENDED)]
    assert members[0].employee_name == "Cam"
    assert members[0].confirmed is True
    assert members[0].has_time_entry is True


def test_open_entry_defaults_clock_out_to_leader_clock_out():
    [member] = build(time_clock=InMemoryTimeClock([entry("c", at(9), None)]))

    assert member.edited_clock_out == "16:00"
    assert member.original_clock_out is None


def test_entry_ending_before_shift_starts_is_ignored():
    members = build(
        InMemoryAssignments([Assignment(user_id="a", full_name="Ana")]),
        InMemoryTimeClock([entry("a", at(5), at(7)), entry("x", at(6), at(7, 30))]),
    )

    assert [m.user_id for m in members] == ["a"]
    assert members[0].has_time_entry is False
    assert members[0].confirmed is False


def test_leader_is_never_on_the_roster():
    members = build(
        InMemoryAssignments([Assignment(user_id="lead"), Assignment(user_id="a")]),
        InMemoryTimeClock([entry("lead", at(8), at(16))]),
    )

    assert [m.user_id for m in members] == ["a"]


def test_latest_entry_wins_for_repeat_clock_ins():
    [member] = build(
        time_clock=InMemoryTimeClock(
            [entry("c", at(8), at(11), entry_id="e1"), entry("c", at(12), at(16), entry_id="e2")]
        )
    )

    assert member.entry_id == "e2"


def test_failed_source_degrades_to_empty():
    members = build(
        InMemoryAssignments(fail=True),
        InMemoryTimeClock([entry("c", at(9), at(15))]),
        InMemoryDirectory(fail=True),
    )

    assert [m.user_id for m in members] == ["c"]
    assert members[0].avatar_url is None


def test_avatars_are_merged():
    members = build(
        InMemoryAssignments([Assignment(user_id="a", full_name="Ana")]),
        directory=InMemoryDirectory(avatars={"a": "https://cdn.example.com/a.png"}),
    )

    assert members[0].avatar_url == "https://cdn.example.com/a.png"


def test_overlaps_window_treats_open_entry_as_running_until_now():
    open_entry = entry("c", at(6), None)
    assert overlaps_window(open_entry, WINDOW, now=at(8, 30)) is True
    assert overlaps_window(open_entry, WINDOW, now=at(7)) is False


def test_assigned_member_clocked_in_before_leader_keeps_entry():
    [member] = build(
        InMemoryAssignments([Assignment(user_id="a", full_name="Ana")]),
        InMemoryTimeClock([entry("a", at(6), at(9))]),
    )

    assert member.source == MemberSource.ASSIGNED
    assert member.has_time_entry is True
    assert member.confirmed is True
    assert member.edited is False
    assert (member.edited_clock_in, member.edited_clock_out) == ("06:00", "09:00")
