from __future__ import annotations

import logging
from datetime import time
from typing import Optional

from ..common.validators import require_non_empty, require_non_negative_int
from ..core.constants import DEFAULT_ADMIN_LIST_LIMIT, DEFAULT_REQUEST_LIST_LIMIT
from ..core.enums import RequestStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import ShiftCorrectionPayload
from .repository import RequestRepository

logger = logging.getLogger(__name__)


class RequestService:
    """Approval queue for shift correction requests.

    Requests are advisory: they are stored as pending and only an admin
    decision moves them on. Applying approved hours to the time clock belongs
    to the timesheet side of the application.
    """

    def __init__(self, requests: RequestRepository, *, allow_overnight: bool = False):
        self._requests = requests
        self._allow_overnight = bool(allow_overnight)

    def _check_clock_order(self, clock_in: Optional[time], clock_out: Optional[time]) -> None:
        if self._allow_overnight or not clock_in or not clock_out:
            return
        if clock_out < clock_in:
            raise ValidationError("Clock-out cannot be earlier than clock-in")

    def create_shift_correction(self, payload: ShiftCorrectionPayload) -> int:
        require_non_empty(payload.user_id, "Crew member")
        require_non_empty(payload.submitted_by, "Submitted by")
        require_non_empty(payload.notes, "Notes")
        require_non_negative_int(payload.break_minutes, "Break minutes")
        self._check_clock_order(payload.requested_clock_in, payload.requested_clock_out)

        request_id = self._requests.create_shift_request(payload)
        logger.info(
            "Shift request %s created for %s on %s by %s",
            request_id,
            payload.user_id,
            payload.work_date,
            payload.submitted_by,
        )
        return request_id

    def approve_shift_correction(
        self,
        *,
        current_role: Role,
        admin_user_id: str,
        request_id: int,
        admin_note: str = "",
    ) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to review requests")

        req = self._requests.get_shift_request(request_id=int(request_id))
        if not req:
            raise ValidationError("Request not found")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Request has already been decided")

        # Settings may have changed since the request was filed.
        self._check_clock_order(req.requested_clock_in, req.requested_clock_out)

        decided = self._requests.decide_shift_request(
            request_id=int(request_id),
            status=RequestStatus.APPROVED,
            decided_by=admin_user_id,
            admin_note=(admin_note or "").strip() or None,
        )
        if not decided:
            raise ValidationError("Approving the request failed")

    def reject_shift_correction(
        self,
        *,
        current_role: Role,
        admin_user_id: str,
        request_id: int,
        admin_note: str = "",
    ) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to review requests")

        decided = self._requests.decide_shift_request(
            request_id=int(request_id),
            status=RequestStatus.REJECTED,
            decided_by=admin_user_id,
            admin_note=(admin_note or "").strip() or None,
        )
        if not decided:
            raise ValidationError("Rejecting the request failed")

    def list_my_requests(self, *, user_id: str) -> list[dict]:
        return list(self._requests.list_shift_requests(user_id=user_id, limit=DEFAULT_REQUEST_LIST_LIMIT))

    def list_admin_pending(self) -> list[dict]:
        return list(self._requests.list_shift_requests(status=RequestStatus.PENDING, limit=DEFAULT_ADMIN_LIST_LIMIT))
