from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status stored on an attendance event."""

    PRESENT = "Present"


class Outcome(str, Enum):
    """Per-address result of one attendance decision."""

    MARKED = "MARKED"
    ALREADY_MARKED_RECENTLY = "ALREADY_MARKED_RECENTLY"
    NOT_FOUND = "NOT_FOUND"
    ERROR = "ERROR"
