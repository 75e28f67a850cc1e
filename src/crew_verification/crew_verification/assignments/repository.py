from __future__ import annotations

from typing import Protocol, Sequence

from .model import Assignment


class AssignmentRepository(Protocol):
    def list_for_job(self, *, job_id: str, exclude_user_id: str) -> Sequence[Assignment]:
        raise NotImplementedError
