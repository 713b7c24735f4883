from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import InsertResult, RecentAttendanceRow


class AttendanceRepository(Protocol):
    """Store contract for attendance events.

    All datetimes are aware UTC values; window arithmetic happens in the
    caller, so implementations only compare against `since`.
    """

    def has_recent_event(self, student_id: int, *, since: datetime) -> bool:
        """True if the student has an event with occurred_at >= since."""

        raise NotImplementedError

    def insert_event(
        self,
        *,
        student_id: int,
        scanned_mac: str,
        occurred_at: datetime,
        status: AttendanceStatus,
    ) -> InsertResult:
        raise NotImplementedError

    def record_if_not_recent(
        self,
        *,
        student_id: int,
        scanned_mac: str,
        since: datetime,
        occurred_at: datetime,
        status: AttendanceStatus,
    ) -> Optional[InsertResult]:
        """Check-then-insert as one transaction.

        Returns None when a recent event already exists.
        """

        raise NotImplementedError

    def query_recent(self, *, since: datetime) -> Sequence[RecentAttendanceRow]:
        """Latest event per student since `since`, most recent first."""

        raise NotImplementedError
