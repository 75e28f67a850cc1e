from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Callable, Iterable, Mapping, Optional, Sequence

from ..assignments.model import Assignment
from ..assignments.repository import AssignmentRepository
from ..attendance.model import TimeClockEntry
from ..attendance.repository import TimeClockRepository
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_FETCH_WORKERS
from ..core.enums import MemberSource
from ..directory.model import display_name
from ..directory.repository import DirectoryRepository
from .factory import CrewMemberFactory
from .model import CrewMember, ShiftWindow

logger = logging.getLogger(__name__)


def overlaps_window(entry: TimeClockEntry, window: ShiftWindow, *, now: datetime) -> bool:
    """True when the entry's interval overlaps the leader's shift.

    An entry that is still open counts as running until `now`.
    """
    entry_end = now if entry.is_open else entry.clock_out
    return entry.clock_in <= window.clock_out and entry_end >= window.clock_in


class RosterAggregator:
    """Merge assignments, time clock entries and profile metadata into one roster.

    Each source is fetched independently; a failing source is logged and
    treated as empty so the leader still gets whatever the others returned.
    """

    def __init__(
        self,
        assignments: AssignmentRepository,
        time_clock: TimeClockRepository,
        directory: DirectoryRepository,
        *,
        factory: Optional[CrewMemberFactory] = None,
        max_workers: int = DEFAULT_FETCH_WORKERS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._assignments = assignments
        self._time_clock = time_clock
        self._directory = directory
        self._factory = factory or CrewMemberFactory()
        self._max_workers = max(1, int(max_workers))
        self._clock = clock

    def _fetch_assigned(self, window: ShiftWindow) -> Sequence[Assignment]:
        try:
            return list(self._assignments.list_for_job(job_id=window.job_id, exclude_user_id=window.leader_id))
        except Exception:
            logger.exception("Error fetching assigned members for job %s", window.job_id)
            return []

    def _fetch_entries(self, window: ShiftWindow) -> Sequence[TimeClockEntry]:
        try:
            return list(
                self._time_clock.list_clocked_in_before(
                    job_id=window.job_id,
                    exclude_user_id=window.leader_id,
                    before=window.clock_out,
                )
            )
        except Exception:
            logger.exception("Error fetching time entries for job %s", window.job_id)
            return []

    def _fetch_avatars(self, user_ids: Iterable[str]) -> Mapping[str, str]:
        ids = list(user_ids)
        if not ids:
            return {}
        try:
            return dict(self._directory.list_avatars(ids))
        except Exception:
            logger.exception("Error fetching profile avatars for %d users", len(ids))
            return {}

    def build(self, window: ShiftWindow) -> list[CrewMember]:
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            assigned_future = pool.submit(self._fetch_assigned, window)
            entries_future = pool.submit(self._fetch_entries, window)
            assigned = assigned_future.result()
            entries = entries_future.result()

        now = self._clock()
        overlapping = [
            e for e in entries if e.user_id != window.leader_id and overlaps_window(e, window, now=now)
        ]

        # Entries come ordered by clock-in, so the latest one per person wins.
        entry_by_user: dict[str, TimeClockEntry] = {}
        for entry in overlapping:
            entry_by_user[entry.user_id] = entry

        members: dict[str, CrewMember] = {}

        for assignment in assigned:
            if assignment.user_id == window.leader_id or assignment.user_id in members:
                continue
            name = display_name(assignment.full_name, assignment.email)
            entry = entry_by_user.get(assignment.user_id)
            if entry:
                members[assignment.user_id] = self._factory.from_entry(
                    entry, name=name, source=MemberSource.ASSIGNED, window=window
                )
            else:
                members[assignment.user_id] = self._factory.assigned_without_entry(
                    user_id=assignment.user_id, name=name, window=window
                )

        for user_id, entry in entry_by_user.items():
            if user_id in members:
                continue
            members[user_id] = self._factory.from_entry(
                entry,
                name=display_name(entry.employee_name),
                source=MemberSource.ATTENDED,
                window=window,
            )

        avatars = self._fetch_avatars(members.keys())
        for user_id, member in members.items():
            member.avatar_url = avatars.get(user_id)

        logger.info(
            "Built crew roster for job %s: %d assigned, %d attended",
            window.job_id,
            sum(1 for m in members.values() if m.source == MemberSource.ASSIGNED),
            sum(1 for m in members.values() if m.source == MemberSource.ATTENDED),
        )
        return list(members.values())
