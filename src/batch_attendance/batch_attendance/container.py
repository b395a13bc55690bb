from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import AttendanceReportService
from .students.mysql_student_repository import MySQLStudentDirectory
from .students.repository import StudentDirectory


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: AttendanceRepository
    student_directory: StudentDirectory

    attendance_service: AttendanceService
    report_service: AttendanceReportService


def build_container(
    *,
    db_config: dict,
    store_backend: str = "mysql",
    enforce_membership: bool = False,
    attendance_repo: Optional[AttendanceRepository] = None,
    student_directory: Optional[StudentDirectory] = None,
) -> Container:
    """Wire repositories and services.

    ``attendance_repo`` / ``student_directory`` override the configured
    backends (tests, alternative collaborators).
    """

    conn: Optional[DatabaseConnection] = None
    if attendance_repo is None or student_directory is None:
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    if attendance_repo is None:
        if store_backend == "memory":
            attendance_repo = InMemoryAttendanceRepository()
        elif store_backend == "mysql":
            attendance_repo = MySQLAttendanceRepository(conn)
        else:
            raise ValueError(f"Unknown STORE_BACKEND: {store_backend!r}")

    if student_directory is None:
        student_directory = MySQLStudentDirectory(conn)

    attendance_service = AttendanceService(
        attendance_repo,
        directory=student_directory if enforce_membership else None,
    )
    report_service = AttendanceReportService(attendance_repo, student_directory)

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        student_directory=student_directory,
        attendance_service=attendance_service,
        report_service=report_service,
    )
