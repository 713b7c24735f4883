from __future__ import annotations

import mysql.connector


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.rowcount = 0
        self.lastrowid = None

    def execute(self, sql, params=()):
        self._conn.executed.append((" ".join(sql.split()), tuple(params)))
        if self._conn.error is not None:
            raise self._conn.error
        self.rowcount = self._conn.rowcount
        self.lastrowid = self._conn.lastrowid

    def fetchone(self):
        return self._conn.results.pop(0) if self._conn.results else None

    def fetchall(self):
        rows, self._conn.results = self._conn.results, []
        return rows

    def close(self):
        self._conn.cursor_closed = True


class FakeConnection:
    def __init__(self, *, results=None, rowcount=1, lastrowid=None, error=None, rollback_error=None, close_error=None):
        self.rollback_error = rollback_error
        self.close_error = close_error
        self.results = list(results or [])
        self.rowcount = rowcount
        self.lastrowid = lastrowid
        self.error = error
        self.executed = []
        self.committed = False
        self.rolled_back = False
        self.closed = False
        self.cursor_closed = False

    def cursor(self, dictionary=False):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True
        if self.rollback_error is not None:
            raise self.rollback_error

    def close(self):
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


class FakeConnFactory:
    """Stands in for DatabaseConnection; hands out one prepared connection."""

    def __init__(self, conn: FakeConnection):
        self.conn = conn

    def connect(self):
        return self.conn


class ExhaustedConnFactory:
    """Every connection is already borrowed."""

    def connect(self):
        raise mysql.connector.errors.PoolError("Failed getting connection; pool exhausted")
