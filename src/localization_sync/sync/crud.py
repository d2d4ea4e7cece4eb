# SPDX-License-Identifier: MIT
"""Store-then-cache write orchestration for localization records."""

from collections.abc import Iterable, Mapping

from ..cache.base import CacheBackend
from ..enums import LookupOutcome
from ..exceptions import CacheBackendError, ConfigurationError
from ..keys import KeyBuilder
from ..logging_config import get_detail_logger, get_status_logger
from ..models import LocalizationRecord, RecordLookup, SyncResult
from ..store.base import RecordStore, first_by_identity


Pairs = Mapping[str, str] | Iterable[tuple[str, str]]


def _as_pairs(pairs: Pairs) -> list[tuple[str, str]]:
    items = pairs.items() if isinstance(pairs, Mapping) else pairs
    return [(str(name), str(value)) for name, value in items]


class SyncCrud:
    """Keeps the cache coherent with the durable store across writes.

    Every mutation computes the canonical key, mutates and commits the store,
    and only then applies the matching cache mutation with the identical key.
    Store failures propagate and leave the cache untouched. Cache failures
    after a commit are logged and reported in the ``SyncResult``; they never
    undo the store write. Records that do not exist are silent no-ops for
    update and delete.
    """

    def __init__(
        self,
        store: RecordStore | None,
        cache: CacheBackend | None,
        key_builder: KeyBuilder | None = None,
    ):
        """Initialize the orchestrator.

        Raises:
            ConfigurationError: If the store or cache handle is missing
        """
        if store is None:
            raise ConfigurationError("A record store is required", component="sync")
        if cache is None:
            raise ConfigurationError("A cache backend is required", component="sync")

        self.store = store
        self.cache = cache
        self.key_builder = key_builder or KeyBuilder()
        self.detail_logger = get_detail_logger()
        self.status_logger = get_status_logger()

    def _lookup(self, name: str, culture: str, key: str) -> RecordLookup:
        return RecordLookup.of(self.store.find_one(name, culture, key))

    def _set_cached(self, entries: list[tuple[str, str]]) -> SyncResult:
        result = SyncResult(store_changed=True)
        for key, value in entries:
            try:
                self.cache.set(key, value)
                result.keys.append(key)
            except CacheBackendError as e:
                self._report_cache_failure("set", key, e)
                result.failed_cache_keys.append(key)
        return result

    def _remove_cached(self, keys: list[str]) -> SyncResult:
        result = SyncResult(store_changed=True)
        for key in keys:
            try:
                self.cache.remove(key)
                result.keys.append(key)
            except CacheBackendError as e:
                self._report_cache_failure("remove", key, e)
                result.failed_cache_keys.append(key)
        return result

    def _report_cache_failure(
        self, operation: str, key: str, error: CacheBackendError
    ) -> None:
        self.status_logger.warning(
            f"Cache {operation} failed after store commit, entry is stale: {key}"
        )
        self.detail_logger.exception(f"Cache {operation} failed for '{key}': {error}")

    def insert(
        self,
        name: str,
        value: str,
        culture: str,
        resource_group: str | None = None,
    ) -> SyncResult:
        """Insert a record, or update it when the identity already exists.

        An existing record falls through to ``update``, which then performs
        the only cache write of the call.
        """
        name, value, culture = str(name), str(value), str(culture)
        key = self.key_builder.compute_key(culture, resource_group, name)

        with self.store.transaction():
            lookup = self._lookup(name, culture, key)
            if lookup.outcome is LookupOutcome.NOT_FOUND:
                self.store.insert(
                    LocalizationRecord(
                        name=name, value=value, culture_name=culture, resource_key=key
                    )
                )

        if lookup.outcome is LookupOutcome.FOUND:
            self.detail_logger.debug(f"Record exists for '{key}', updating instead")
            return self.update(name, value, culture, resource_group)

        self.detail_logger.debug(f"Inserted record '{key}'")
        return self._set_cached([(key, value)])

    def insert_many(
        self,
        pairs: Pairs,
        culture: str,
        resource_group: str | None = None,
    ) -> SyncResult:
        """Insert every pair whose identity does not exist yet.

        Existing entries are skipped without updating their value, unlike the
        single-item ``insert``. Repeated names in one batch keep the first
        value. Only newly created entries are written to the cache.
        """
        culture = str(culture)
        keyed = [
            (name, value, self.key_builder.compute_key(culture, resource_group, name))
            for name, value in _as_pairs(pairs)
        ]
        if not keyed:
            return SyncResult()

        created: list[tuple[str, str]] = []
        with self.store.transaction():
            existing = first_by_identity(
                self.store.find_many(
                    [name for name, _, _ in keyed],
                    culture,
                    [key for _, _, key in keyed],
                )
            )
            staged: set[tuple[str, str]] = set()
            for name, value, key in keyed:
                if (name, key) in existing or (name, key) in staged:
                    self.detail_logger.debug(f"Skipping existing record '{key}'")
                    continue
                self.store.insert(
                    LocalizationRecord(
                        name=name, value=value, culture_name=culture, resource_key=key
                    )
                )
                staged.add((name, key))
                created.append((key, value))

        self.detail_logger.debug(
            f"Batch insert created {len(created)} of {len(keyed)} records"
        )
        if not created:
            return SyncResult()
        return self._set_cached(created)

    def update(
        self,
        name: str,
        value: str,
        culture: str,
        resource_group: str | None = None,
    ) -> SyncResult:
        """Update the value of an existing record; absent records are a no-op."""
        name, value, culture = str(name), str(value), str(culture)
        key = self.key_builder.compute_key(culture, resource_group, name)

        with self.store.transaction():
            lookup = self._lookup(name, culture, key)
            if lookup.record is not None:
                lookup.record.value = value
                self.store.update(lookup.record)

        if lookup.outcome is LookupOutcome.NOT_FOUND:
            self.detail_logger.debug(f"No record for '{key}', update skipped")
            return SyncResult()

        self.detail_logger.debug(f"Updated record '{key}'")
        return self._set_cached([(key, value)])

    def update_many(
        self,
        pairs: Pairs,
        culture: str,
        resource_group: str | None = None,
    ) -> SyncResult:
        """Update every pair that exists; missing pairs are no-ops."""
        culture = str(culture)
        keyed = [
            (name, value, self.key_builder.compute_key(culture, resource_group, name))
            for name, value in _as_pairs(pairs)
        ]
        if not keyed:
            return SyncResult()

        updated: list[tuple[str, str]] = []
        with self.store.transaction():
            existing = first_by_identity(
                self.store.find_many(
                    [name for name, _, _ in keyed],
                    culture,
                    [key for _, _, key in keyed],
                )
            )
            for name, value, key in keyed:
                record = existing.get((name, key))
                if record is None:
                    self.detail_logger.debug(f"No record for '{key}', update skipped")
                    continue
                record.value = value
                self.store.update(record)
                updated.append((key, value))

        self.detail_logger.debug(
            f"Batch update changed {len(updated)} of {len(keyed)} records"
        )
        if not updated:
            return SyncResult()
        return self._set_cached(updated)

    def delete(
        self,
        name: str,
        culture: str,
        resource_group: str | None = None,
    ) -> SyncResult:
        """Delete a record and its cache entry; absent records are a no-op."""
        name, culture = str(name), str(culture)
        key = self.key_builder.compute_key(culture, resource_group, name)

        with self.store.transaction():
            lookup = self._lookup(name, culture, key)
            if lookup.record is not None:
                self.store.delete(lookup.record)

        if lookup.outcome is LookupOutcome.NOT_FOUND:
            self.detail_logger.debug(f"No record for '{key}', delete skipped")
            return SyncResult()

        self.detail_logger.debug(f"Deleted record '{key}'")
        return self._remove_cached([key])

    def delete_many(
        self,
        names: Iterable[str],
        culture: str,
        resource_group: str | None = None,
    ) -> SyncResult:
        """Delete the records that exist and remove exactly their cache keys."""
        culture = str(culture)
        keyed = {
            str(name): self.key_builder.compute_key(culture, resource_group, name)
            for name in names
        }
        if not keyed:
            return SyncResult()

        with self.store.transaction():
            existing = first_by_identity(
                self.store.find_many(keyed.keys(), culture, keyed.values())
            )
            removed = [
                existing[(name, key)]
                for name, key in keyed.items()
                if (name, key) in existing
            ]
            if removed:
                self.store.delete_many(removed)

        self.detail_logger.debug(
            f"Batch delete removed {len(removed)} of {len(keyed)} records"
        )
        if not removed:
            return SyncResult()
        return self._remove_cached([record.resource_key for record in removed])

    def export_snapshot(
        self, culture: str, resource_group: str | None = None
    ) -> list[LocalizationRecord]:
        """Return every record stored for (culture, resource group)."""
        path = self.key_builder.compute_path(culture, resource_group)
        records = self.store.find_by_key_fragment(path)
        self.detail_logger.debug(f"Exported {len(records)} records for '{path}'")
        return records
