from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    LEADER = "leader"
    CREW = "crew"


class MemberSource(str, Enum):
    """Which input list a roster member came from."""

    ASSIGNED = "assigned"
    ATTENDED = "attended"
    ADDED = "added"


class TimeField(str, Enum):
    """Editable time fields on a roster member."""

    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"


class RequestStatus(str, Enum):
    """Approval workflow state of a shift correction request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RequestType(str, Enum):
    SHIFT = "shift"
