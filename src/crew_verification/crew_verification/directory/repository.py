from __future__ import annotations

from typing import Iterable, Mapping, Optional, Protocol, Sequence

from .model import DirectoryEntry


class DirectoryRepository(Protocol):
    """Repository interface for the team directory and profile metadata.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_user_id(self, user_id: str) -> Optional[DirectoryEntry]:
        raise NotImplementedError

    def list_active(self) -> Sequence[DirectoryEntry]:
        raise NotImplementedError

    def list_avatars(self, user_ids: Iterable[str]) -> Mapping[str, str]:
        """Map user_id -> avatar URL; users without an avatar are left out."""

        raise NotImplementedError
