from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Assignment:
    """A team member assigned to a job, joined with their directory name."""

    user_id: str
    full_name: Optional[str] = None
    email: Optional[str] = None
