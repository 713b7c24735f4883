from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import as_utc
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import InsertResult, RecentAttendanceRow
from .repository import AttendanceRepository


def _naive_utc(value: datetime) -> datetime:
    # DATETIME columns carry no zone; the session runs at +00:00.
    return as_utc(value).replace(tzinfo=None)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def has_recent_event(self, student_id: int, *, since: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT event_id
                FROM attendance_events
                WHERE student_ref=%s AND occurred_at >= %s
                LIMIT 1
                """,
                (int(student_id), _naive_utc(since)),
            )
            return fetchone(cur) is not None

    def insert_event(
        self,
        *,
        student_id: int,
        scanned_mac: str,
        occurred_at: datetime,
        status: AttendanceStatus,
    ) -> InsertResult:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_events(student_ref, scanned_mac, occurred_at, status)
                VALUES(%s,%s,%s,%s)
                """,
                (int(student_id), scanned_mac, _naive_utc(occurred_at), status.value),
            )
            return InsertResult(rows_affected=int(cur.rowcount), event_id=cur.lastrowid)

    def record_if_not_recent(
        self,
        *,
        student_id: int,
        scanned_mac: str,
        since: datetime,
        occurred_at: datetime,
        status: AttendanceStatus,
    ) -> Optional[InsertResult]:
        with db_cursor(self._conn_factory) as (_, cur):
            # Row lock on the student serializes concurrent marks for them.
            cur.execute("SELECT id FROM students WHERE id=%s FOR UPDATE", (int(student_id),))
            fetchone(cur)
            cur.execute(
                """
                SELECT event_id
                FROM attendance_events
                WHERE student_ref=%s AND occurred_at >= %s
                LIMIT 1
                """,
                (int(student_id), _naive_utc(since)),
            )
            if fetchone(cur) is not None:
                return None
            cur.execute(
                """
                INSERT INTO attendance_events(student_ref, scanned_mac, occurred_at, status)
                VALUES(%s,%s,%s,%s)
                """,
                (int(student_id), scanned_mac, _naive_utc(occurred_at), status.value),
            )
            return InsertResult(rows_affected=int(cur.rowcount), event_id=cur.lastrowid)

    def query_recent(self, *, since: datetime) -> Sequence[RecentAttendanceRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, name, registered_mac, device_address_scanned, last_seen, status
                FROM (
                    SELECT
                        s.student_id, s.name,
                        s.bluetooth_mac_address AS registered_mac,
                        ae.scanned_mac AS device_address_scanned,
                        ae.occurred_at AS last_seen,
                        ae.status,
                        ROW_NUMBER() OVER (
                            PARTITION BY ae.student_ref
                            ORDER BY ae.occurred_at DESC, ae.event_id DESC
                        ) AS rn
                    FROM attendance_events ae
                    JOIN students s ON s.id = ae.student_ref
                    WHERE ae.occurred_at >= %s
                ) latest
                WHERE rn = 1
                ORDER BY last_seen DESC
                """,
                (_naive_utc(since),),
            )
            rows = fetchall(cur)

            return [
                RecentAttendanceRow(
                    student_id=str(r["student_id"]),
                    name=r["name"],
                    registered_mac=r["registered_mac"],
                    device_address_scanned=r["device_address_scanned"],
                    last_seen=as_utc(r["last_seen"]),
                    status=AttendanceStatus(r["status"]),
                )
                for r in rows
            ]
