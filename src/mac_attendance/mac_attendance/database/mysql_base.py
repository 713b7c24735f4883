from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StoreFault, StoreTimeout
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# mysql.connector.errorcode values that mean "took too long"
_TIMEOUT_ERRNOS = {
    1205,  # ER_LOCK_WAIT_TIMEOUT
    2013,  # CR_SERVER_LOST (read timeout)
    3024,  # ER_QUERY_TIMEOUT (max_execution_time exceeded)
}


def _as_store_fault(exc: mysql.connector.Error) -> StoreFault:
    if getattr(exc, "errno", None) in _TIMEOUT_ERRNOS:
        return StoreTimeout("timeout")
    return StoreFault(str(exc))


def _quietly(action, what: str) -> None:
    # A dead connection fails rollback/close too; keep the first error.
    try:
        action()
    except mysql.connector.Error as exc:
        logger.warning("Ignoring error during %s: %s", what, exc)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Borrow a connection and cursor for one unit of work.

    Commits on success, rolls back on error and always hands the connection
    back. Driver errors surface as StoreFault.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise _as_store_fault(exc) from exc
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            _quietly(cur.close, "cursor close")
    except mysql.connector.Error as exc:
        _quietly(conn.rollback, "rollback")
        raise _as_store_fault(exc) from exc
    except Exception:
        _quietly(conn.rollback, "rollback")
        raise
    finally:
        _quietly(conn.close, "connection release")


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
