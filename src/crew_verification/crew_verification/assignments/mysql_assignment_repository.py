from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Assignment
from .repository import AssignmentRepository


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_job(self, *, job_id: str, exclude_user_id: str) -> Sequence[Assignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.user_id, d.full_name, d.email
                FROM project_team_assignments a
                JOIN team_directory d ON d.user_id = a.user_id
                WHERE a.project_id=%s AND a.user_id<>%s
                ORDER BY a.assigned_at, a.user_id
                """,
                (job_id, exclude_user_id),
            )
            return [
                Assignment(
                    user_id=str(r["user_id"]),
                    full_name=r.get("full_name"),
                    email=r.get("email"),
                )
                for r in fetchall(cur)
            ]
