from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.engine import AttendanceDecisionEngine
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core import constants
from .database.connection import DBConfig, DatabaseConnection
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    students_repo: StudentRepository
    attendance_repo: AttendanceRepository

    engine: AttendanceDecisionEngine
    attendance_service: AttendanceService

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()


def build_services(
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    *,
    conn: Optional[DatabaseConnection] = None,
    options: Optional[dict] = None,
) -> Container:
    opts = options or {}
    engine = AttendanceDecisionEngine(
        students_repo,
        attendance_repo,
        max_workers=int(opts.get("MAX_WORKERS", constants.DEFAULT_MAX_WORKERS)),
        item_timeout=float(opts.get("STORE_TIMEOUT_SECONDS", constants.DEFAULT_STORE_TIMEOUT_SECONDS)),
        guarded=bool(opts.get("MARK_GUARD_ENABLED", False)),
    )
    attendance_service = AttendanceService(
        engine,
        attendance_repo,
        mark_window_minutes=int(opts.get("MARK_WINDOW_MINUTES", constants.DEFAULT_MARK_WINDOW_MINUTES)),
        recent_window_minutes=int(opts.get("RECENT_WINDOW_MINUTES", constants.DEFAULT_RECENT_WINDOW_MINUTES)),
        display_timezone=str(opts.get("DISPLAY_TIMEZONE", constants.DEFAULT_DISPLAY_TIMEZONE)),
    )
    return Container(
        conn=conn,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        engine=engine,
        attendance_service=attendance_service,
    )


def build_container(*, db_config: dict, options: Optional[dict] = None) -> Container:
    opts = options or {}
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_size=int(opts.get("DB_POOL_SIZE", 10)),
        connect_timeout=int(opts.get("DB_CONNECT_TIMEOUT", 5)),
    )
    conn = DatabaseConnection(config).open()
    # Live units never need more connections than the pool holds.
    opts = {**opts, "MAX_WORKERS": min(int(opts.get("MAX_WORKERS", constants.DEFAULT_MAX_WORKERS)), config.pool_size)}

    return build_services(
        MySQLStudentRepository(conn),
        MySQLAttendanceRepository(conn),
        conn=conn,
        options=opts,
    )
