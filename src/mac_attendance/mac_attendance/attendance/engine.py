from __future__ import annotations

import logging
import queue
import threading
import time
from datetime import datetime, timedelta
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_MAX_WORKERS, DEFAULT_STORE_TIMEOUT_SECONDS
from ..core.enums import AttendanceStatus, Outcome
from ..core.exceptions import IntegrityAnomaly, NotFoundError, StoreTimeout
from ..students.repository import StudentRepository
from .model import AddressOutcome, BatchResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

TIMEOUT_ERROR = "timeout"
ZERO_ROWS_ERROR = "insert affected no rows"


class _Unit:
    """State of one address while its thread runs.

    The clock starts when the thread gets a worker slot. Once the write has
    begun (`committing`) the unit can no longer time out; once it has timed
    out the write is refused.
    """

    def __init__(self, mac: str):
        self.mac = mac
        self.started_at: Optional[float] = None
        self.committing = False
        self.finished = False
        self.timed_out = False
        self._holds_slot = False
        self._lock = threading.Lock()

    def start(self) -> None:
        with self._lock:
            self.started_at = time.monotonic()
            self._holds_slot = True

    def begin_commit(self) -> bool:
        with self._lock:
            if self.timed_out:
                return False
            self.committing = True
            return True

    def finish(self) -> None:
        with self._lock:
            self.finished = True

    def remaining(self, timeout: float, now: float) -> Optional[float]:
        with self._lock:
            if self.started_at is None or self.committing or self.finished:
                return None
            return self.started_at + timeout - now

    def expire(self, timeout: float, now: float) -> bool:
        with self._lock:
            if self.started_at is None or self.committing or self.finished:
                return False
            if now - self.started_at < timeout:
                return False
            self.timed_out = True
            return True

    def release_slot(self, slots: threading.Semaphore) -> None:
        with self._lock:
            if not self._holds_slot:
                return
            self._holds_slot = False
        slots.release()


class AttendanceDecisionEngine:
    """Decide, per normalized MAC address, whether to record attendance.

    Each address is an independent unit of work: resolve the student, look
    for an event inside the window (boundary inclusive), insert if none.
    Every address gets its own thread; at most `max_workers` run store calls
    at once, and each one has `item_timeout` seconds from the moment it
    starts. A unit that times out gives its slot to the next address and is
    not allowed to write afterwards. Outcomes are folded into a BatchResult;
    a fault in one unit is recorded in `errors` and never affects its
    siblings.
    """

    def __init__(
        self,
        students: StudentRepository,
        attendance: AttendanceRepository,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
        item_timeout: float = DEFAULT_STORE_TIMEOUT_SECONDS,
        guarded: bool = False,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._students = students
        self._attendance = attendance
        self._max_workers = max(1, int(max_workers))
        self._item_timeout = float(item_timeout)
        self._guarded = bool(guarded)
        self._clock = clock

    def decide(
        self,
        batch: Sequence[str],
        window: timedelta,
        *,
        now: Optional[datetime] = None,
    ) -> BatchResult:
        result = BatchResult()
        if not batch:
            return result

        now = now or self._clock()
        since = now - window

        slots = threading.Semaphore(min(self._max_workers, len(batch)))
        done: queue.Queue = queue.Queue()
        pending = [_Unit(mac) for mac in batch]
        for unit in pending:
            threading.Thread(
                target=self._run,
                args=(unit, slots, done, now, since),
                name=f"attendance-{unit.mac}",
                daemon=True,
            ).start()

        while pending:
            try:
                unit, outcome = done.get(timeout=self._next_wait(pending))
            except queue.Empty:
                pass
            else:
                if unit in pending:
                    pending.remove(unit)
                    result.add(outcome)

            clock = time.monotonic()
            for unit in list(pending):
                if unit.expire(self._item_timeout, clock):
                    unit.release_slot(slots)
                    pending.remove(unit)
                    logger.error("Timed out processing MAC %s", unit.mac)
                    result.add(AddressOutcome(mac=unit.mac, outcome=Outcome.ERROR, error=TIMEOUT_ERROR))

        logger.info(
            "Attendance processing complete. Marked: %d, Already Marked: %d, Not Found: %d, Errors: %d",
            result.marked,
            result.already_marked_recently,
            result.not_found,
            len(result.errors),
        )
        return result

    def _next_wait(self, pending: Sequence[_Unit]) -> float:
        clock = time.monotonic()
        waits = [w for w in (u.remaining(self._item_timeout, clock) for u in pending) if w is not None]
        if not waits:
            return self._item_timeout
        return max(0.0, min(waits))

    def _run(self, unit: _Unit, slots: threading.Semaphore, done: queue.Queue, now: datetime, since: datetime) -> None:
        slots.acquire()
        unit.start()
        try:
            outcome = self.decide_one(unit.mac, now=now, since=since, gate=unit.begin_commit)
        finally:
            unit.finish()
            unit.release_slot(slots)
        done.put((unit, outcome))

    def decide_one(
        self,
        mac: str,
        *,
        now: datetime,
        since: datetime,
        gate: Optional[Callable[[], bool]] = None,
    ) -> AddressOutcome:
        """Run the resolve / recency-check / insert steps for one address.

        `gate` is asked right before the write; returning False aborts the
        unit as a timeout without touching the store. Store faults are
        converted to an ERROR outcome here.
        """
        try:
            return self._decide(mac, now=now, since=since, gate=gate)
        except NotFoundError:
            logger.info("MAC address %s not found in students table", mac)
            return AddressOutcome(mac=mac, outcome=Outcome.NOT_FOUND)
        except StoreTimeout:
            logger.error("Timed out processing MAC %s", mac)
            return AddressOutcome(mac=mac, outcome=Outcome.ERROR, error=TIMEOUT_ERROR)
        except IntegrityAnomaly as exc:
            logger.error("Insert for MAC %s affected no rows: %s", mac, exc)
            return AddressOutcome(mac=mac, outcome=Outcome.ERROR, error=ZERO_ROWS_ERROR)
        except Exception as exc:
            logger.error("Error processing MAC %s: %s", mac, exc)
            return AddressOutcome(mac=mac, outcome=Outcome.ERROR, error=f"Error for {mac}: {exc}")

    def _decide(
        self,
        mac: str,
        *,
        now: datetime,
        since: datetime,
        gate: Optional[Callable[[], bool]],
    ) -> AddressOutcome:
        student = self._students.find_by_mac(mac)
        if student is None:
            raise NotFoundError(mac)
        sid = student.internal_id

        if self._guarded:
            self._check_gate(gate, mac)
            inserted = self._attendance.record_if_not_recent(
                student_id=sid,
                scanned_mac=mac,
                since=since,
                occurred_at=now,
                status=AttendanceStatus.PRESENT,
            )
            if inserted is None:
                return self._already_marked(mac, student.student_id, sid)
        else:
            if self._attendance.has_recent_event(sid, since=since):
                return self._already_marked(mac, student.student_id, sid)
            self._check_gate(gate, mac)
            inserted = self._attendance.insert_event(
                student_id=sid,
                scanned_mac=mac,
                occurred_at=now,
                status=AttendanceStatus.PRESENT,
            )

        if inserted.rows_affected <= 0:
            raise IntegrityAnomaly(f"student={student.student_id} mac={mac}")

        logger.info("Marked attendance for student %s (MAC: %s)", student.student_id, mac)
        return AddressOutcome(mac=mac, outcome=Outcome.MARKED, student_id=sid)

    @staticmethod
    def _check_gate(gate: Optional[Callable[[], bool]], mac: str) -> None:
        if gate is not None and not gate():
            raise StoreTimeout(f"write abandoned for {mac}")

    @staticmethod
    def _already_marked(mac: str, public_id: str, sid: int) -> AddressOutcome:
        logger.info("Student %s (MAC: %s) already marked present recently", public_id, mac)
        return AddressOutcome(mac=mac, outcome=Outcome.ALREADY_MARKED_RECENTLY, student_id=sid)
