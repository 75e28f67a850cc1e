from __future__ import annotations

from dataclasses import dataclass

from .assignments.mysql_assignment_repository import MySQLAssignmentRepository
from .attendance.mysql_attendance_repository import MySQLTimeClockRepository
from .core.constants import DEFAULT_FETCH_WORKERS
from .database.connection import DBConfig, DatabaseConnection
from .directory.mysql_directory_repository import MySQLDirectoryRepository
from .hours.clock import calculator_for
from .requests.mysql_request_repository import MySQLRequestRepository
from .requests.service import RequestService
from .verification.aggregator import RosterAggregator
from .verification.committer import ReconciliationCommitter
from .verification.service import CrewVerificationService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    assignments_repo: MySQLAssignmentRepository
    time_clock_repo: MySQLTimeClockRepository
    directory_repo: MySQLDirectoryRepository
    requests_repo: MySQLRequestRepository

    request_service: RequestService
    crew_verification_service: CrewVerificationService


def build_container(
    *,
    db_config: dict,
    fetch_workers: int = DEFAULT_FETCH_WORKERS,
    allow_overnight: bool = False,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    assignments_repo = MySQLAssignmentRepository(conn)
    time_clock_repo = MySQLTimeClockRepository(conn)
    directory_repo = MySQLDirectoryRepository(conn)
    requests_repo = MySQLRequestRepository(conn)

    request_service = RequestService(requests_repo, allow_overnight=allow_overnight)
    crew_verification_service = CrewVerificationService(
        RosterAggregator(assignments_repo, time_clock_repo, directory_repo, max_workers=fetch_workers),
        ReconciliationCommitter(request_service, directory_repo),
        directory_repo,
        calculator=calculator_for(allow_overnight=allow_overnight),
    )

    return Container(
        conn=conn,
        assignments_repo=assignments_repo,
        time_clock_repo=time_clock_repo,
        directory_repo=directory_repo,
        requests_repo=requests_repo,
        request_service=request_service,
        crew_verification_service=crew_verification_service,
    )
