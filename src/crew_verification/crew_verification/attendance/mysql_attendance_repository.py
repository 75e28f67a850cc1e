from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_datetime
from .model import TimeClockEntry
from .repository import TimeClockRepository


class MySQLTimeClockRepository(TimeClockRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_clocked_in_before(
        self,
        *,
        job_id: str,
        exclude_user_id: str,
        before: datetime,
    ) -> Sequence[TimeClockEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT entry_id, user_id, employee_name, job_id,
                       clock_in, clock_out, total_hours, break_time_minutes, status
                FROM time_clock
                WHERE job_id=%s AND user_id<>%s AND clock_in<=%s
                ORDER BY clock_in
                """,
                (job_id, exclude_user_id, before),
            )
            rows = fetchall(cur)
            return [
                TimeClockEntry(
                    entry_id=str(r["entry_id"]),
                    user_id=str(r["user_id"]),
                    employee_name=r.get("employee_name"),
                    job_id=str(r["job_id"]),
                    clock_in=normalize_mysql_datetime(r["clock_in"]),
                    clock_out=normalize_mysql_datetime(r.get("clock_out")),
                    total_hours=float(r["total_hours"]) if r.get("total_hours") is not None else None,
                    break_minutes=int(r.get("break_time_minutes") or 0),
                    status=r.get("status") or "active",
                )
                for r in rows
            ]
