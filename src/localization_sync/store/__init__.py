# SPDX-License-Identifier: MIT
"""Durable record stores.

- RecordStore: contract consumed by the sync layer
- SqliteRecordStore: relational table with a unique identity index
- XmlFileRecordStore: single XML file with linear scan
- create_record_store: builds the store selected by configuration
"""

from pathlib import Path

from ..config import StoreConfig
from ..constants import DEFAULT_DB_FILENAME
from ..enums import StoreBackendType
from ..exceptions import ConfigurationError
from .base import RecordStore
from .sqlite_store import SqliteRecordStore
from .xml_store import XmlFileRecordStore


def create_record_store(store_config: StoreConfig) -> RecordStore:
    """Create the record store selected by configuration.

    Raises:
        ConfigurationError: If the backend type is unknown
    """
    backend_type = StoreBackendType(store_config.backend)

    if store_config.path:
        path = Path(store_config.path)
    else:
        default_name = (
            DEFAULT_DB_FILENAME
            if backend_type is StoreBackendType.SQLITE
            else "localization.xml"
        )
        path = Path.cwd() / ".localization-sync" / default_name

    if backend_type is StoreBackendType.SQLITE:
        return SqliteRecordStore(path)
    if backend_type is StoreBackendType.XML:
        return XmlFileRecordStore(path)

    raise ConfigurationError(
        f"Unsupported store backend: {backend_type.value}", component="store"
    )


__all__ = [
    "RecordStore",
    "SqliteRecordStore",
    "XmlFileRecordStore",
    "create_record_store",
]
