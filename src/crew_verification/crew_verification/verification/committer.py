from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import format_clock
from ..core.exceptions import AuthenticationError
from ..directory.model import display_name
from ..directory.repository import DirectoryRepository
from ..hours.clock import clock_to_time
from ..requests.model import ShiftCorrectionPayload
from ..requests.service import RequestService
from .model import CrewMember, MemberFailure, SubmissionResult
from .notifier import LoggingNotifier, Notifier
from .roster import CrewRoster

logger = logging.getLogger(__name__)


class ReconciliationCommitter:
    """Turn a verified roster into shift correction requests.

    Requests go out one at a time in roster order. A failure is recorded
    against that member and the loop moves on.
    """

    def __init__(
        self,
        requests: RequestService,
        directory: DirectoryRepository,
        *,
        notifier: Optional[Notifier] = None,
    ):
        self._requests = requests
        self._directory = directory
        self._notifier = notifier or LoggingNotifier()

    def _leader_name(self, leader_id: str) -> str:
        try:
            entry = self._directory.get_by_user_id(leader_id)
        except Exception:
            logger.exception("Directory lookup failed for leader %s", leader_id)
            entry = None
        return entry.display_name if entry else display_name(None)

    @staticmethod
    def build_notes(member: CrewMember, *, leader_name: str, job_name: str) -> str:
        new_times = f"{member.edited_clock_in} - {member.edited_clock_out}"
        if member.is_new_entry:
            return f"Hours added by crew leader {leader_name} for {job_name}. Time: {new_times}"

        original_in = format_clock(member.original_clock_in) if member.original_clock_in else "N/A"
        original_out = format_clock(member.original_clock_out) if member.original_clock_out else "Active"
        return (
            f"Hours edited by crew leader {leader_name}. "
            f"Original: {original_in} - {original_out}. New: {new_times}"
        )

    def submit(
        self,
        roster: CrewRoster,
        leader_id: Optional[str],
        shift_date: Optional[date] = None,
        *,
        notifier: Optional[Notifier] = None,
    ) -> SubmissionResult:
        if not leader_id:
            raise AuthenticationError("A signed-in crew leader is required to submit crew verification")

        notifier = notifier or self._notifier
        shift_date = shift_date or roster.window.shift_date
        leader_name = self._leader_name(leader_id)
        result = SubmissionResult()

        for member in roster:
            if not member.needs_request:
                continue

            result.requested += 1
            try:
                payload = ShiftCorrectionPayload(
                    user_id=member.user_id,
                    work_date=shift_date,
                    requested_clock_in=clock_to_time(member.edited_clock_in),
                    requested_clock_out=clock_to_time(member.edited_clock_out),
                    break_minutes=member.break_minutes,
                    job_name=roster.window.job_name or None,
                    notes=self.build_notes(member, leader_name=leader_name, job_name=roster.window.job_name),
                    submitted_by=leader_id,
                )
                self._requests.create_shift_correction(payload)
            except Exception as e:
                logger.exception("Error creating shift request for %s", member.employee_name)
                result.failed.append(MemberFailure(user_id=member.user_id, employee_name=member.employee_name, error=str(e)))
                notifier.notify_failure(member.employee_name)
                continue

            result.succeeded += 1

        logger.info(
            "Crew verification for job %s by %s: %d requested, %d succeeded, %d failed",
            roster.window.job_id,
            leader_id,
            result.requested,
            result.succeeded,
            len(result.failed),
        )
        notifier.notify_completion(result.succeeded)
        return result
