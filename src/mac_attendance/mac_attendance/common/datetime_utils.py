from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo


def now_utc() -> datetime:
    """Current instant as an aware UTC datetime.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive values (DATETIME columns are stored in UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_utc(value: datetime) -> str:
    """Format as 'YYYY-MM-DD HH:MM:SS' in UTC, without offset suffix."""
    return as_utc(value).strftime("%Y-%m-%d %H:%M:%S")


def to_local_iso(value: datetime, tz_name: str) -> str:
    return as_utc(value).astimezone(ZoneInfo(tz_name)).isoformat(timespec="seconds")
