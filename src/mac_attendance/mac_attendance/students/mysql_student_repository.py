from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Student
from .repository import StudentRepository


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_mac(self, mac: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, student_id, name, bluetooth_mac_address
                FROM students
                WHERE bluetooth_mac_address=%s
                """,
                (mac,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Student(
                internal_id=int(row["id"]),
                student_id=str(row["student_id"]),
                name=row["name"],
                registered_mac=row["bluetooth_mac_address"],
            )
