from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import CLOCK_FORMAT
from ..core.enums import RequestStatus, RequestType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from ..directory.model import display_name
from .model import ShiftCorrectionPayload, ShiftCorrectionRequest
from .repository import RequestRepository


class MySQLRequestRepository(RequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_shift_request(self, payload: ShiftCorrectionPayload) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shift_requests(
                    user_id, request_type, status, work_date,
                    requested_clock_in, requested_clock_out, break_minutes,
                    job_name, notes, submitted_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    payload.user_id,
                    RequestType.SHIFT.value,
                    RequestStatus.PENDING.value,
                    payload.work_date,
                    payload.requested_clock_in,
                    payload.requested_clock_out,
                    int(payload.break_minutes),
                    payload.job_name,
                    payload.notes,
                    payload.submitted_by,
                ),
            )
            return int(cur.lastrowid)

    def get_shift_request(self, *, request_id: int) -> Optional[ShiftCorrectionRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT request_id, user_id, request_type, status, work_date,
                       requested_clock_in, requested_clock_out, break_minutes,
                       job_name, notes, submitted_by, created_at,
                       decided_by, decided_at, admin_note
                FROM shift_requests
                WHERE request_id=%s
                """,
                (int(request_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return ShiftCorrectionRequest(
                request_id=int(r["request_id"]),
                user_id=str(r["user_id"]),
                work_date=r["work_date"],
                requested_clock_in=normalize_mysql_time(r.get("requested_clock_in")),
                requested_clock_out=normalize_mysql_time(r.get("requested_clock_out")),
                notes=r.get("notes"),
                status=RequestStatus(r["status"]),
                created_at=r["created_at"],
                submitted_by=r.get("submitted_by"),
                break_minutes=int(r.get("break_minutes") or 0),
                job_name=r.get("job_name"),
                request_type=RequestType(r["request_type"]),
                decided_by=r.get("decided_by"),
                decided_at=r.get("decided_at"),
                admin_note=r.get("admin_note"),
            )

    def list_shift_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        user_id: Optional[str] = None,
        limit: int = 200,
    ) -> Sequence[dict]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("r.status=%s")
            params.append(status.value)
        if user_id is not None:
            clauses.append("r.user_id=%s")
            params.append(user_id)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT r.request_id, r.user_id, d.full_name, d.email,
                       r.work_date, r.requested_clock_in, r.requested_clock_out,
                       r.break_minutes, r.job_name, r.notes, r.status, r.created_at,
                       r.submitted_by, r.admin_note
                FROM shift_requests r
                LEFT JOIN team_directory d ON d.user_id = r.user_id
                WHERE {where}
                ORDER BY r.created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            out: list[dict] = []
            for r in fetchall(cur):
                clock_in = normalize_mysql_time(r.get("requested_clock_in"))
                clock_out = normalize_mysql_time(r.get("requested_clock_out"))
                out.append(
                    {
                        "request_id": int(r["request_id"]),
                        "user_id": str(r["user_id"]),
                        "employee_name": display_name(r.get("full_name"), r.get("email")),
                        "work_date": r["work_date"].strftime("%Y-%m-%d"),
                        "requested_clock_in": clock_in.strftime(CLOCK_FORMAT) if clock_in else "",
                        "requested_clock_out": clock_out.strftime(CLOCK_FORMAT) if clock_out else "",
                        "break_minutes": int(r.get("break_minutes") or 0),
                        "job_name": r.get("job_name") or "",
                        "notes": r.get("notes") or "",
                        "status": r["status"],
                        "created_at": r["created_at"].strftime("%Y-%m-%d %H:%M"),
                        "submitted_by": r.get("submitted_by") or "",
                        "admin_note": r.get("admin_note") or "",
                    }
                )
            return out

    def decide_shift_request(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: str,
        admin_note: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shift_requests
                SET status=%s, decided_by=%s, decided_at=NOW(), admin_note=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    status.value,
                    decided_by,
                    admin_note,
                    int(request_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0
