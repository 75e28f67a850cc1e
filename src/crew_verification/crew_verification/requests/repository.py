from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import ShiftCorrectionPayload, ShiftCorrectionRequest


class RequestRepository(Protocol):
    def create_shift_request(self, payload: ShiftCorrectionPayload) -> int:
        raise NotImplementedError

    def get_shift_request(self, *, request_id: int) -> Optional[ShiftCorrectionRequest]:
        raise NotImplementedError

    def list_shift_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        user_id: Optional[str] = None,
        limit: int = 200,
    ) -> Sequence[dict]:
        """Return UI rows (joined with the directory)."""

        raise NotImplementedError

    def decide_shift_request(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: str,
        admin_note: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError
