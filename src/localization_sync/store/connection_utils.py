# SPDX-License-Identifier: MIT
"""Centralized SQLite connection configuration utilities.

All SQLite access in the record store goes through these helpers so every
connection gets the same WAL mode, timeout and PRAGMA settings.
"""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from ..logging_config import get_detail_logger


detail_logger = get_detail_logger()

DEFAULT_TIMEOUT = 30.0


def configure_sqlite_connection(
    conn: sqlite3.Connection,
    enable_wal: bool = True,
) -> None:
    """Configure SQLite connection with performance optimizations and WAL mode.

    Args:
        conn: SQLite database connection to configure
        enable_wal: Whether to enable WAL mode (default: True)
    """
    if enable_wal:
        conn.execute("PRAGMA journal_mode = WAL")

    conn.execute("PRAGMA synchronous = NORMAL")
    conn.execute("PRAGMA temp_store = MEMORY")
    detail_logger.debug("Configured SQLite PRAGMA settings")


def open_connection(
    db_path: str | Path,
    timeout: float = DEFAULT_TIMEOUT,
    enable_wal: bool = True,
) -> sqlite3.Connection:
    """Open a configured connection with explicit transaction control.

    The connection runs in autocommit mode (``isolation_level=None``); callers
    issue ``BEGIN``/``COMMIT``/``ROLLBACK`` themselves.
    """
    detail_logger.debug(
        f"Opening SQLite connection to {db_path} with {timeout}s timeout"
    )
    conn = sqlite3.connect(str(db_path), timeout=timeout, isolation_level=None)
    conn.row_factory = sqlite3.Row
    configure_sqlite_connection(conn, enable_wal=enable_wal)
    return conn


@contextmanager
def get_configured_connection(
    db_path: str | Path,
    timeout: float = DEFAULT_TIMEOUT,
    enable_wal: bool = True,
) -> Iterator[sqlite3.Connection]:
    """Get a configured SQLite connection that is closed on exit.

    Args:
        db_path: Path to the SQLite database file
        timeout: Connection timeout in seconds (default: 30.0)
        enable_wal: Whether to enable WAL mode (default: True)

    Yields:
        Configured SQLite connection
    """
    conn = open_connection(db_path, timeout, enable_wal)
    try:
        yield conn
    finally:
        conn.close()
        detail_logger.debug(f"Closed SQLite connection to {db_path}")
