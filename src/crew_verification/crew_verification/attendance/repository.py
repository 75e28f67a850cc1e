from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import TimeClockEntry


class TimeClockRepository(Protocol):
    def list_clocked_in_before(
        self,
        *,
        job_id: str,
        exclude_user_id: str,
        before: datetime,
    ) -> Sequence[TimeClockEntry]:
        """Entries on the job that started at or before `before`, oldest first.

        Whether an entry actually overlaps a shift is decided by the caller,
        since open entries are measured against the current time.
        """

        raise NotImplementedError
