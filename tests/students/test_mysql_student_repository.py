from src.mac_attendance.mac_attendance.students.model import Student
from src.mac_attendance.mac_attendance.students.mysql_student_repository import MySQLStudentRepository
from tests.fake_mysql import FakeConnection, FakeConnFactory


def test_find_by_mac_returns_student():
    conn = FakeConnection(
        results=[{"id": 1, "student_id": "21BCE0001", "name": "Aarav", "bluetooth_mac_address": "AA:01"}]
    )

    found = MySQLStudentRepository(FakeConnFactory(conn)).find_by_mac("AA:01")

    assert found == Student(internal_id=1, student_id="21BCE0001", name="Aarav", registered_mac="AA:01")
    assert conn.executed[0][1] == ("AA:01",)
    assert conn.closed


def test_find_by_mac_missing_returns_none():
    assert MySQLStudentRepository(FakeConnFactory(FakeConnection())).find_by_mac("FF:FF") is None
