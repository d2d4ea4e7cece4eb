# SPDX-License-Identifier: MIT
"""SQLite-backed record store."""

import sqlite3
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

from ..exceptions import StoreError
from ..logging_config import get_detail_logger, get_status_logger
from ..models import LocalizationRecord
from .base import RecordStore
from .connection_utils import DEFAULT_TIMEOUT, open_connection
from .schema import init_database


detail_logger = get_detail_logger()
status_logger = get_status_logger()

# Stay well below SQLite's bound-parameter limit in IN (...) lookups
_LOOKUP_CHUNK_SIZE = 400

_SELECT_COLUMNS = "name, value, culture_name, resource_key"


def _row_to_record(row: sqlite3.Row) -> LocalizationRecord:
    return LocalizationRecord(
        name=row["name"],
        value=row["value"],
        culture_name=row["culture_name"],
        resource_key=row["resource_key"],
    )


class SqliteRecordStore(RecordStore):
    """Relational store with a unique index on (name, culture_name, resource_key).

    Each thread gets its own connection so concurrent callers do not share a
    transaction. Mutations open a transaction lazily; ``commit`` and
    ``rollback`` close it.
    """

    name = "sqlite"

    def __init__(self, db_path: Path, timeout: float = DEFAULT_TIMEOUT):
        """Initialize the store and its schema.

        Args:
            db_path: Path to the SQLite database file

        Raises:
            StoreError: If the database cannot be created or initialized
        """
        self.db_path = Path(db_path)
        self.timeout = timeout
        self._local = threading.local()
        self._connections: list[sqlite3.Connection] = []
        self._connections_lock = threading.Lock()

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            init_database(self.db_path)
            detail_logger.debug(f"Database schema initialized: {self.db_path}")
        except (sqlite3.Error, OSError) as e:
            error_msg = f"Failed to initialize database at {self.db_path}"
            status_logger.error(error_msg)
            detail_logger.exception(f"{error_msg}: {e}")
            raise StoreError(error_msg, component=self.name) from e

    def _connection(self) -> sqlite3.Connection:
        conn: sqlite3.Connection | None = getattr(self._local, "conn", None)
        if conn is None:
            conn = open_connection(self.db_path, timeout=self.timeout)
            self._local.conn = conn
            with self._connections_lock:
                self._connections.append(conn)
        return conn

    @contextmanager
    def _errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except sqlite3.Error as e:
            detail_logger.exception(f"SQLite {operation} failed: {e}")
            raise StoreError(
                f"SQLite {operation} failed: {e}", component=self.name
            ) from e

    def _write(self, sql: str, params: tuple[str, ...]) -> int:
        conn = self._connection()
        if not conn.in_transaction:
            conn.execute("BEGIN")
        cursor = conn.execute(sql, params)
        return cursor.rowcount

    def find_one(
        self, name: str, culture: str, resource_key: str
    ) -> LocalizationRecord | None:
        with self._errors("find_one"):
            row = (
                self._connection()
                .execute(
                    f"""
                    SELECT {_SELECT_COLUMNS} FROM localization_records
                    WHERE name = ? AND culture_name = ? AND resource_key = ?
                    ORDER BY id
                    LIMIT 1
                    """,
                    (name, culture, resource_key),
                )
                .fetchone()
            )
        return _row_to_record(row) if row else None

    def find_many(
        self, names: Iterable[str], culture: str, resource_keys: Iterable[str]
    ) -> list[LocalizationRecord]:
        name_list = list(dict.fromkeys(names))
        key_set = set(resource_keys)
        if not name_list or not key_set:
            return []

        records: list[tuple[int, LocalizationRecord]] = []
        with self._errors("find_many"):
            conn = self._connection()
            for start in range(0, len(name_list), _LOOKUP_CHUNK_SIZE):
                chunk = name_list[start : start + _LOOKUP_CHUNK_SIZE]
                placeholders = ", ".join("?" for _ in chunk)
                rows = conn.execute(
                    f"""
                    SELECT id, {_SELECT_COLUMNS} FROM localization_records
                    WHERE culture_name = ? AND name IN ({placeholders})
                    """,
                    (culture, *chunk),
                ).fetchall()
                records.extend(
                    (row["id"], _row_to_record(row))
                    for row in rows
                    if row["resource_key"] in key_set
                )

        records.sort(key=lambda item: item[0])
        detail_logger.debug(
            f"find_many matched {len(records)} of {len(name_list)} names for {culture}"
        )
        return [record for _, record in records]

    def find_by_key_fragment(self, fragment: str) -> list[LocalizationRecord]:
        with self._errors("find_by_key_fragment"):
            rows = (
                self._connection()
                .execute(
                    f"""
                    SELECT {_SELECT_COLUMNS} FROM localization_records
                    WHERE instr(resource_key, ?) > 0
                    ORDER BY id
                    """,
                    (fragment,),
                )
                .fetchall()
            )
        return [_row_to_record(row) for row in rows]

    def insert(self, record: LocalizationRecord) -> None:
        with self._errors("insert"):
            self._write(
                """
                INSERT INTO localization_records
                (name, value, culture_name, resource_key)
                VALUES (?, ?, ?, ?)
                """,
                (record.name, record.value, record.culture_name, record.resource_key),
            )

    def update(self, record: LocalizationRecord) -> None:
        with self._errors("update"):
            self._write(
                """
                UPDATE localization_records
                SET value = ?, updated_at = CURRENT_TIMESTAMP
                WHERE name = ? AND culture_name = ? AND resource_key = ?
                """,
                (record.value, *record.identity()),
            )

    def delete(self, record: LocalizationRecord) -> None:
        with self._errors("delete"):
            self._write(
                """
                DELETE FROM localization_records
                WHERE name = ? AND culture_name = ? AND resource_key = ?
                """,
                record.identity(),
            )

    def commit(self) -> None:
        with self._errors("commit"):
            conn = self._connection()
            if conn.in_transaction:
                conn.execute("COMMIT")

    def rollback(self) -> None:
        with self._errors("rollback"):
            conn = self._connection()
            if conn.in_transaction:
                conn.execute("ROLLBACK")

    def count(self) -> int:
        """Return the number of stored records."""
        with self._errors("count"):
            row = (
                self._connection()
                .execute("SELECT COUNT(*) FROM localization_records")
                .fetchone()
            )
        return int(row[0]) if row else 0

    def close(self) -> None:
        with self._connections_lock:
            for conn in self._connections:
                try:
                    conn.close()
                except sqlite3.ProgrammingError as e:
                    # Connections are bound to the thread that created them
                    detail_logger.debug(f"Could not close SQLite connection: {e}")
            self._connections.clear()
        self._local = threading.local()
