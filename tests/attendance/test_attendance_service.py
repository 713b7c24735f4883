from __future__ import annotations

from datetime import timedelta

import pytest

from src.mac_attendance.mac_attendance.attendance.engine import AttendanceDecisionEngine
from src.mac_attendance.mac_attendance.attendance.service import AttendanceService
from src.mac_attendance.mac_attendance.core.exceptions import ValidationError
from tests.fakes import InMemoryAttendance, InMemoryStudents, student


def _service(students, attendance, **kwargs):
    engine = AttendanceDecisionEngine(students, attendance, max_workers=4)
    return AttendanceService(engine, attendance, **kwargs)


@pytest.mark.parametrize("body", [None, [], "AA:01", {}, {"mac_addresses": None}, {"mac_addresses": "AA:01"}])
def test_mark_rejects_malformed_body(body):
    students = InMemoryStudents.of()
    svc = _service(students, InMemoryAttendance(students))

    with pytest.raises(ValidationError):
        svc.mark_attendance(body)


def test_empty_list_skips_engine(fixed_now):
    students = InMemoryStudents.of(student(1, "AA:01"))
    svc = _service(students, InMemoryAttendance(students))

    assert svc.mark_attendance({"mac_addresses": []}, now=fixed_now) == {"message": "no attendance marked"}
    assert students.lookups == []


def test_blank_addresses_normalize_to_nothing(fixed_now):
    students = InMemoryStudents.of(student(1, "AA:01"))
    attendance = InMemoryAttendance(students)
    svc = _service(students, attendance)

    payload = svc.mark_attendance({"mac_addresses": ["", "  "]}, now=fixed_now)

    assert payload["marked"] == 0
    assert payload["errors"] == []
    assert payload["message"] != "no attendance marked"
    assert attendance.events == []
    assert students.lookups == []


def test_mac_variants_of_one_student_mark_once(fixed_now):
    students = InMemoryStudents.of(student(1, "AA:BB:CC:DD:EE:01"))
    attendance = InMemoryAttendance(students)
    svc = _service(students, attendance)

    payload = svc.mark_attendance(
        {"mac_addresses": ["aa:bb:cc:dd:ee:01", " AA:BB:CC:DD:EE:01", "AA:BB:CC:DD:EE:01"]},
        now=fixed_now,
    )

    assert payload == {
        "message": "Attendance processing complete.",
        "marked": 1,
        "already_marked_recently": 0,
        "not_found": 0,
        "errors": [],
    }
    assert len(attendance.events) == 1


def test_mark_window_comes_from_settings(fixed_now):
    students = InMemoryStudents.of(student(1, "AA:01"))
    attendance = InMemoryAttendance(students)
    svc = _service(students, attendance, mark_window_minutes=10)

    svc.mark_attendance({"mac_addresses": ["AA:01"]}, now=fixed_now)
    payload = svc.mark_attendance({"mac_addresses": ["AA:01"]}, now=fixed_now + timedelta(minutes=11))

    assert payload["marked"] == 1


def test_recent_attendance_is_most_recent_first(fixed_now):
    students = InMemoryStudents.of(student(1, "AA:01", name="Early"), student(2, "AA:02", name="Late"))
    attendance = InMemoryAttendance(students)
    svc = _service(students, attendance)

    svc.mark_attendance({"mac_addresses": ["AA:01"]}, now=fixed_now - timedelta(minutes=20))
    svc.mark_attendance({"mac_addresses": ["AA:02"]}, now=fixed_now - timedelta(minutes=5))

    rows = svc.get_recent_attendance(now=fixed_now)

    assert [r["name"] for r in rows] == ["Late", "Early"]


def test_recent_attendance_row_shape(fixed_now):
    students = InMemoryStudents.of(student(1, "AA:01", name="Asha"))
    attendance = InMemoryAttendance(students)
    svc = _service(students, attendance, display_timezone="Asia/Kolkata")
    svc.mark_attendance({"mac_addresses": ["aa:01"]}, now=fixed_now)

    rows = svc.get_recent_attendance(now=fixed_now + timedelta(minutes=1))

    assert rows == [
        {
            "student_id": "21BCE0001",
            "name": "Asha",
            "registered_mac": "AA:01",
            "device_address_scanned": "AA:01",
            "last_seen_utc": "2026-02-02 08:25:00",
            "last_seen_local": "2026-02-02T13:55:00+05:30",
            "status": "Present",
        }
    ]


def test_recent_attendance_excludes_events_outside_window(fixed_now):
    students = InMemoryStudents.of(student(1, "AA:01"))
    attendance = InMemoryAttendance(students)
    svc = _service(students, attendance, recent_window_minutes=60)
    svc.mark_attendance({"mac_addresses": ["AA:01"]}, now=fixed_now - timedelta(minutes=61))

    assert svc.get_recent_attendance(now=fixed_now) == []
