from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.crew_verification.crew_verification.core.enums import MemberSource, TimeField
from src.crew_verification.crew_verification.core.exceptions import AuthenticationError
from src.crew_verification.crew_verification.directory.model import DirectoryEntry
from src.crew_verification.crew_verification.requests.service import RequestService
from src.crew_verification.crew_verification.verification.committer import ReconciliationCommitter
from src.crew_verification.crew_verification.verification.model import CrewMember, ShiftWindow
from src.crew_verification.crew_verification.verification.notifier import CollectingNotifier
from src.crew_verification.crew_verification.verification.roster import CrewRoster

WINDOW = ShiftWindow(
    job_id="J-1",
    job_name="Dock repair",
    leader_id="lead",
    clock_in=datetime(2026, 3, 2, 8, 0),
    clock_out=datetime(2026, 3, 2, 16, 0),
)


class FakeRequestsRepo:
    def __init__(self, fail_for=()):
        self.created = []
        self._fail_for = set(fail_for)

    def create_shift_request(self, payload):
        if payload.user_id in self._fail_for:
            raise RuntimeError("insert failed")
        self.created.append(payload)
        return len(self.created)


class FakeDirectory:
    def get_by_user_id(self, user_id):
        if user_id == "lead":
            return DirectoryEntry(user_id="lead", email="lead@example.com", full_name="Lee Leader")
        return None


def member_a() -> CrewMember:
    return CrewMember(
        user_id="a",
        employee_name="Ana",
        source=MemberSource.ASSIGNED,
        entry_id="e-a",
        original_clock_in=datetime(2026, 3, 2, 8, 0),
        original_clock_out=datetime(2026, 3, 2, 16, 0),
        edited_clock_in="08:00",
        edited_clock_out="16:00",
        status="completed",
        confirmed=True,
    )


def member_b() -> CrewMember:
    return CrewMember(
        user_id="b",
        employee_name="Ben",
        source=MemberSource.ASSIGNED,
        edited_clock_in="08:00",
        edited_clock_out="16:00",
    )


def make(fail_for=()):
    repo = FakeRequestsRepo(fail_for)
    committer = ReconciliationCommitter(RequestService(repo), FakeDirectory())
    return repo, committer


def test_untouched_roster_submits_nothing():
    repo, committer = make()
    notifier = CollectingNotifier()

    result = committer.submit(CrewRoster(WINDOW, [member_a(), member_b()]), "lead", notifier=notifier)

    assert result.requested == 0
    assert result.no_changes is True
    assert repo.created == []
    assert notifier.messages == [{"category": "success", "message": "Crew verification completed"}]


def test_confirming_member_without_entry_sends_one_request():
    repo, committer = make()
    roster = CrewRoster(WINDOW, [member_a(), member_b()])
    roster.toggle_confirmed("b")
    notifier = CollectingNotifier()

    result = committer.submit(roster, "lead", notifier=notifier)

    assert (result.requested, result.succeeded, result.failed) == (1, 1, [])
    [payload] = repo.created
    assert payload.user_id == "b"
    assert payload.work_date == date(2026, 3, 2)
    assert (payload.requested_clock_in, payload.requested_clock_out) == (time(8, 0), time(16, 0))
    assert payload.submitted_by == "lead"
    assert payload.job_name == "Dock repair"
    assert payload.notes == "Hours added by crew leader Lee Leader for Dock repair. Time: 08:00 - 16:00"
    assert notifier.messages[-1]["message"] == "1 shift request submitted for approval"


def test_edited_entry_notes_show_original_and_new_times():
    repo, committer = make()
    roster = CrewRoster(WINDOW, [member_a()])
    roster.edit_time("a", TimeField.CLOCK_OUT, "16:30")
    roster.set_break_minutes("a", 20)

    committer.submit(roster, "lead")

    [payload] = repo.created
    assert payload.notes == "Hours edited by crew leader Lee Leader. Original: 08:00 - 16:00. New: 08:00 - 16:30"
    assert payload.break_minutes == 20


def test_open_entry_notes_show_active():
    member = member_a()
    member.original_clock_out = None
    notes = ReconciliationCommitter.build_notes(member, leader_name="Lee", job_name="Dock repair")
    assert notes == "Hours edited by crew leader Lee. Original: 08:00 - Active. New: 08:00 - 16:00"


def test_unconfirmed_edits_are_not_submitted():
    repo, committer = make()
    roster = CrewRoster(WINDOW, [member_a()])
    roster.edit_time("a", TimeField.CLOCK_IN, "07:30")
    roster.toggle_confirmed("a")

    result = committer.submit(roster, "lead")

    assert result.requested == 0
    assert repo.created == []


def test_one_failure_does_not_stop_the_batch():
    repo, committer = make(fail_for={"b"})
    roster = CrewRoster(WINDOW, [member_b()], directory=FakeDirectory())
    roster.toggle_confirmed("b")
    roster.add_members(["c", "d"])
    notifier = CollectingNotifier()

    result = committer.submit(roster, "lead", notifier=notifier)

    assert (result.requested, result.succeeded) == (3, 2)
    assert [f.user_id for f in result.failed] == ["b"]
    assert [p.user_id for p in repo.created] == ["c", "d"]
    assert {"category": "warning", "message": "Failed to submit request for Ben"} in notifier.messages
    assert notifier.messages[-1]["message"] == "2 shift requests submitted for approval"


def test_missing_leader_fails_before_any_request():
    repo, committer = make()
    roster = CrewRoster(WINDOW, [member_b()])
    roster.toggle_confirmed("b")

    with pytest.raises(AuthenticationError):
        committer.submit(roster, None)
    assert repo.created == []
