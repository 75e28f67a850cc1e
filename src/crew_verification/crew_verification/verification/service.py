from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..common.validators import require_non_empty
from ..core.enums import TimeField
from ..core.exceptions import AuthenticationError, ValidationError
from ..directory.model import DirectoryEntry
from ..directory.repository import DirectoryRepository
from ..hours.calculator.base import HoursCalculator
from .aggregator import RosterAggregator
from .committer import ReconciliationCommitter
from .model import CrewMember, ShiftWindow, SubmissionResult
from .notifier import LoggingNotifier, Notifier
from .roster import CrewRoster, RosterListener

logger = logging.getLogger(__name__)


class CrewVerificationService:
    """Use case: end-of-shift crew verification for a shift leader.

    Holds at most one open roster per leader. Nothing is persisted until
    submit(); skip() simply forgets the roster. Rosters live in this
    process only, so the app must run as a single worker.
    """

    def __init__(
        self,
        aggregator: RosterAggregator,
        committer: ReconciliationCommitter,
        directory: DirectoryRepository,
        *,
        calculator: Optional[HoursCalculator] = None,
        notifier: Optional[Notifier] = None,
    ):
        self._aggregator = aggregator
        self._committer = committer
        self._directory = directory
        self._calculator = calculator
        self._notifier = notifier or LoggingNotifier()
        self._rosters: dict[str, CrewRoster] = {}

    def open(self, window: ShiftWindow, *, on_change: Optional[RosterListener] = None) -> CrewRoster:
        require_non_empty(window.job_id, "Job")
        require_non_empty(window.leader_id, "Shift leader")
        if window.clock_out < window.clock_in:
            raise ValidationError("Shift end cannot be before shift start")

        roster = CrewRoster(
            window,
            self._aggregator.build(window),
            directory=self._directory,
            calculator=self._calculator,
        )
        if on_change:
            roster.subscribe(on_change)

        if window.leader_id in self._rosters:
            logger.info("Discarding unsubmitted crew roster for leader %s", window.leader_id)
        self._rosters[window.leader_id] = roster
        return roster

    def get(self, leader_id: str) -> CrewRoster:
        roster = self._rosters.get(leader_id)
        if roster is None:
            raise ValidationError("No crew verification is in progress")
        return roster

    def is_open(self, leader_id: str) -> bool:
        return leader_id in self._rosters

    def edit_time(self, leader_id: str, user_id: str, field: TimeField | str, value: str) -> CrewMember:
        return self.get(leader_id).edit_time(user_id, field, value)

    def set_break_minutes(self, leader_id: str, user_id: str, minutes: int) -> CrewMember:
        return self.get(leader_id).set_break_minutes(user_id, minutes)

    def toggle_confirmed(self, leader_id: str, user_id: str) -> CrewMember:
        return self.get(leader_id).toggle_confirmed(user_id)

    def add_members(self, leader_id: str, user_ids: Iterable[str], *, notifier: Optional[Notifier] = None) -> int:
        added = self.get(leader_id).add_members(user_ids)
        if added:
            (notifier or self._notifier).notify_added(added)
        return added

    def candidates(self, leader_id: str) -> list[DirectoryEntry]:
        """Directory people who could still be added to the open roster."""
        roster = self.get(leader_id)
        return [e for e in self._directory.list_active() if e.user_id != leader_id and e.user_id not in roster]

    def submit(self, leader_id: Optional[str], *, notifier: Optional[Notifier] = None) -> SubmissionResult:
        if not leader_id:
            raise AuthenticationError("A signed-in crew leader is required to submit crew verification")

        # Removed before committing: a second submit finds no roster.
        roster = self._rosters.pop(leader_id, None)
        if roster is None:
            raise ValidationError("No crew verification is in progress")
        return self._committer.submit(roster, leader_id, roster.window.shift_date, notifier=notifier or self._notifier)

    def skip(self, leader_id: str) -> None:
        self._rosters.pop(leader_id, None)
