# SPDX-License-Identifier: MIT
"""Database schema initialization for the SQLite record store."""

from pathlib import Path

from .connection_utils import get_configured_connection


def init_database(db_path: Path) -> None:
    """Create the localization record table and its indexes.

    Args:
        db_path: Path to the SQLite database file
    """
    with get_configured_connection(db_path) as conn:
        conn.executescript(
            """
            -- One row per (name, culture, canonical key)
            CREATE TABLE IF NOT EXISTS localization_records (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                value TEXT NOT NULL DEFAULT '',
                culture_name TEXT NOT NULL,
                resource_key TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                UNIQUE(name, culture_name, resource_key)
            );
            CREATE INDEX IF NOT EXISTS idx_localization_records_resource_key
                ON localization_records(resource_key);
            CREATE INDEX IF NOT EXISTS idx_localization_records_culture
                ON localization_records(culture_name);
            """
        )
