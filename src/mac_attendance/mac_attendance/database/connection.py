from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector import pooling

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 10
    connect_timeout: int = 5


class DatabaseConnection:
    """Connection pool handed explicitly to repositories.

    Lifecycle: open() once at startup, close() at shutdown. Every unit of
    work borrows one pooled connection via connect() and returns it with
    conn.close().
    """

    def __init__(self, config: DBConfig, *, pool_name: str = "mac_attendance"):
        self._config = config
        self._pool_name = pool_name
        self._pool: Optional[pooling.MySQLConnectionPool] = None

    def open(self) -> "DatabaseConnection":
        if self._pool is None:
            self._pool = pooling.MySQLConnectionPool(
                pool_name=self._pool_name,
                pool_size=int(self._config.pool_size),
                pool_reset_session=True,
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
                connection_timeout=int(self._config.connect_timeout),
                time_zone="+00:00",
            )
            logger.info(
                "Connection pool ready: %s@%s:%s/%s (size=%s)",
                self._config.user,
                self._config.host,
                self._config.port,
                self._config.database,
                self._config.pool_size,
            )
        return self

    def connect(self):
        """Borrow a pooled connection.

        Raises mysql.connector.errors.PoolError when every connection is in
        use; no connection is ever opened outside the pool.
        """
        if self._pool is None:
            self.open()
        try:
            return self._pool.get_connection()
        except mysql.connector.errors.PoolError:
            logger.warning("Connection pool exhausted (size=%s)", self._config.pool_size)
            raise

    def check(self) -> bool:
        """Borrow and release one connection; log the result."""
        conn = None
        try:
            conn = self.connect()
            logger.info("Successfully connected to the database")
            return True
        except mysql.connector.Error as exc:
            logger.error("Error connecting to the database: %s", exc)
            return False
        finally:
            if conn is not None:
                conn.close()

    def close(self) -> None:
        """Stop handing out connections.

        Borrowed connections still go back on close(); idle ones are closed
        when the pool object is collected.
        """
        if self._pool is None:
            return
        self._pool = None
        logger.info("Connection pool closed")
