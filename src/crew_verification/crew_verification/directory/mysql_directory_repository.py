from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DirectoryEntry
from .repository import DirectoryRepository


def _to_entry(r: dict) -> DirectoryEntry:
    return DirectoryEntry(
        user_id=str(r["user_id"]),
        email=r["email"],
        full_name=r.get("full_name"),
        avatar_url=r.get("avatar_url"),
        status=r.get("status") or "active",
    )


class MySQLDirectoryRepository(DirectoryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_user_id(self, user_id: str) -> Optional[DirectoryEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, email, full_name, avatar_url, status
                FROM team_directory
                WHERE user_id=%s
                """,
                (user_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return _to_entry(r)

    def list_active(self) -> Sequence[DirectoryEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, email, full_name, avatar_url, status
                FROM team_directory
                WHERE user_id IS NOT NULL AND status='active'
                ORDER BY full_name, email
                """
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def list_avatars(self, user_ids: Iterable[str]) -> Mapping[str, str]:
        ids = sorted(set(user_ids))
        if not ids:
            return {}

        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT user_id, avatar_url
                FROM profiles
                WHERE user_id IN ({placeholders}) AND avatar_url IS NOT NULL
                """,
                tuple(ids),
            )
            return {str(r["user_id"]): r["avatar_url"] for r in fetchall(cur) if r.get("avatar_url")}
