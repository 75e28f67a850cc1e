from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import UNKNOWN_NAME


@dataclass(frozen=True)
class DirectoryEntry:
    """Domain entity: a person in the company team directory.

    Note: Plain data object (no DB access code).
    """

    user_id: str
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    status: str = "active"

    @property
    def display_name(self) -> str:
        return display_name(self.full_name, self.email)


def display_name(full_name: Optional[str], email: Optional[str] = None) -> str:
    return (full_name or "").strip() or (email or "").strip() or UNKNOWN_NAME
