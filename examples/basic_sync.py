#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Basic localization sync examples using the Localization-Sync Python API.

This script demonstrates:
1. Writing strings through the store-then-cache layer
2. Looking strings up with identity fallback
3. Exporting a group and warming a fresh cache from it
"""

import asyncio
import tempfile
from pathlib import Path

from localization_sync import BulkLoader, KeyBuilder, SyncCrud
from localization_sync.cache import MemoryCacheBackend
from localization_sync.localizer import StringLocalizer
from localization_sync.store import SqliteRecordStore
from localization_sync.sync import StoreSnapshotSource


def write_and_read(crud: SyncCrud) -> None:
    """Insert, update and delete a string and watch the lookup follow."""
    print("=== Write Path ===")

    localizer = StringLocalizer(crud.cache, "en-US", key_builder=crud.key_builder)

    crud.insert("Welcome", "Hello", "en-US")
    print(f"After insert: {localizer['Welcome']}")

    crud.update("Welcome", "Hi", "en-US")
    print(f"After update: {localizer['Welcome']}")

    crud.delete("Welcome", "en-US")
    print(f"After delete: {localizer['Welcome']}")


def batch_import(crud: SyncCrud) -> None:
    """Import a group of strings; existing names keep their value."""
    print("\n=== Batch Import ===")

    crud.insert("Pay", "Pay now", "en-US", "Checkout")
    result = crud.insert_many(
        {"Pay": "ignored", "Cancel": "Cancel order", "Total": "Total"},
        "en-US",
        "Checkout",
    )
    print(f"New entries: {len(result.keys)}")

    for record in crud.export_snapshot("en-US", "Checkout"):
        print(f"  {record.resource_key} = {record.value}")


async def warm_fresh_cache(store: SqliteRecordStore, key_builder: KeyBuilder) -> None:
    """Warm an empty cache from the store, as a new process instance would."""
    print("\n=== Cache Warm-Up ===")

    cache = MemoryCacheBackend()
    loader = BulkLoader(cache, StoreSnapshotSource(store, key_builder), key_builder)
    localizer = await StringLocalizer.create(
        cache, "en-US", "Checkout", key_builder, loader
    )

    print(f"Loaded {localizer.warm_result.loaded} entries")
    print(f"Cancel -> {localizer['Cancel']}")
    print(f"Refund -> {localizer['Refund']} (not stored, name returned)")


def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        key_builder = KeyBuilder()
        store = SqliteRecordStore(Path(tmp) / "example.db")
        crud = SyncCrud(store, MemoryCacheBackend(), key_builder)

        write_and_read(crud)
        batch_import(crud)
        asyncio.run(warm_fresh_cache(store, key_builder))

        store.close()


if __name__ == "__main__":
    main()
