from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any

from ..common.datetime_utils import format_utc, now_utc, to_local_iso
from ..common.validators import require_mac_list
from ..core.constants import (
    BATCH_DONE_MESSAGE,
    DEFAULT_DISPLAY_TIMEZONE,
    DEFAULT_MARK_WINDOW_MINUTES,
    DEFAULT_RECENT_WINDOW_MINUTES,
    EMPTY_BATCH_MESSAGE,
    NOTHING_VALID_MESSAGE,
)
from .engine import AttendanceDecisionEngine
from .model import BatchResult, RecentAttendanceRow
from .normalizer import normalize_macs
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        engine: AttendanceDecisionEngine,
        attendance: AttendanceRepository,
        *,
        mark_window_minutes: int = DEFAULT_MARK_WINDOW_MINUTES,
        recent_window_minutes: int = DEFAULT_RECENT_WINDOW_MINUTES,
        display_timezone: str = DEFAULT_DISPLAY_TIMEZONE,
    ):
        self._engine = engine
        self._attendance = attendance
        self._mark_window = timedelta(minutes=int(mark_window_minutes))
        self._recent_window = timedelta(minutes=int(recent_window_minutes))
        self._display_timezone = display_timezone

    def mark_attendance(self, body: Any, *, now: datetime | None = None) -> dict:
        """Handle one scanner batch; raises ValidationError on a bad body."""
        raw = require_mac_list(body)
        if not raw:
            return {"message": EMPTY_BATCH_MESSAGE}

        logger.info("Received attendance request: %s", ", ".join(str(m) for m in raw))
        macs = normalize_macs(raw)
        if not macs:
            logger.info("No usable MAC addresses after normalization (%d received)", len(raw))
            return {"message": NOTHING_VALID_MESSAGE, **BatchResult().to_dict()}

        result = self._engine.decide(macs, self._mark_window, now=now)
        return {"message": BATCH_DONE_MESSAGE, **result.to_dict()}

    def get_recent_attendance(self, *, now: datetime | None = None) -> list[dict]:
        now = now or now_utc()
        rows = self._attendance.query_recent(since=now - self._recent_window)
        return [self._to_ui(r) for r in rows]

    def _to_ui(self, r: RecentAttendanceRow) -> dict:
        return {
            "student_id": r.student_id,
            "name": r.name,
            "registered_mac": r.registered_mac,
            "device_address_scanned": r.device_address_scanned,
            "last_seen_utc": format_utc(r.last_seen),
            "last_seen_local": to_local_iso(r.last_seen, self._display_timezone),
            "status": r.status.value,
        }
