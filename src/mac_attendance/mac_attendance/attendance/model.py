from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus, Outcome


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one recorded sighting of a student. Immutable."""

    event_id: int
    student_internal_id: int
    scanned_mac: str
    occurred_at: datetime
    status: AttendanceStatus


@dataclass(frozen=True)
class InsertResult:
    rows_affected: int
    event_id: Optional[int] = None


@dataclass(frozen=True)
class RecentAttendanceRow:
    """Read-model for the recent attendance listing."""

    student_id: str
    name: str
    registered_mac: str
    device_address_scanned: str
    last_seen: datetime
    status: AttendanceStatus


@dataclass(frozen=True)
class AddressOutcome:
    mac: str
    outcome: Outcome
    student_id: Optional[int] = None
    error: Optional[str] = None


@dataclass
class BatchResult:
    """Tally of per-address outcomes for one request."""

    marked: int = 0
    already_marked_recently: int = 0
    not_found: int = 0
    errors: list[str] = field(default_factory=list)

    def add(self, item: AddressOutcome) -> None:
        if item.outcome is Outcome.MARKED:
            self.marked += 1
        elif item.outcome is Outcome.ALREADY_MARKED_RECENTLY:
            self.already_marked_recently += 1
        elif item.outcome is Outcome.NOT_FOUND:
            self.not_found += 1
        else:
            self.errors.append(item.error or f"Error for {item.mac}")

    def to_dict(self) -> dict:
        return {
            "marked": self.marked,
            "already_marked_recently": self.already_marked_recently,
            "not_found": self.not_found,
            "errors": list(self.errors),
        }
