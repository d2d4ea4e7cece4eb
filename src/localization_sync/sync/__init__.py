# SPDX-License-Identifier: MIT
"""Cache synchronization package: coherent writes and cache warm-up."""

from .bulk_loader import BulkLoader
from .crud import SyncCrud
from .snapshot import SnapshotSource, StoreSnapshotSource, XmlSnapshotSource


__all__ = [
    "BulkLoader",
    "SnapshotSource",
    "StoreSnapshotSource",
    "SyncCrud",
    "XmlSnapshotSource",
]
