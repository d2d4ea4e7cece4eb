# SPDX-License-Identifier: MIT
"""Pytest configuration and shared fixtures."""

import pytest

from localization_sync.cache.base import CacheBackend
from localization_sync.cache.memory import MemoryCacheBackend
from localization_sync.config import reset_config_manager
from localization_sync.exceptions import CacheBackendError
from localization_sync.keys import KeyBuilder
from localization_sync.models import LocalizationRecord
from localization_sync.service import reset_service
from localization_sync.store.sqlite_store import SqliteRecordStore
from localization_sync.sync.crud import SyncCrud


class FlakyCacheBackend(CacheBackend):
    """Memory cache that fails for selected keys.

    Used to simulate a distributed cache dropping individual round trips.
    """

    name = "flaky"

    def __init__(self, failing_keys=None, fail_all=False):
        self.inner = MemoryCacheBackend()
        self.failing_keys = set(failing_keys or [])
        self.fail_all = fail_all

    def _check(self, key: str) -> None:
        if self.fail_all or key in self.failing_keys:
            raise CacheBackendError("simulated outage", key=key, component=self.name)

    def get(self, key: str) -> str | None:
        self._check(key)
        return self.inner.get(key)

    def set(self, key: str, value: str) -> None:
        self._check(key)
        self.inner.set(key, value)

    def remove(self, key: str) -> None:
        self._check(key)
        self.inner.remove(key)


@pytest.fixture(autouse=True)
def reset_globals():
    """Reset global config manager and service between tests."""
    reset_config_manager()
    reset_service()
    yield
    reset_service()
    reset_config_manager()


@pytest.fixture
def isolated_db_path(tmp_path):
    """Provide an isolated SQLite database path for a test."""
    return tmp_path / "test_localization.db"


@pytest.fixture
def sqlite_store(isolated_db_path):
    """SQLite record store on a temporary database."""
    store = SqliteRecordStore(isolated_db_path)
    yield store
    store.close()


@pytest.fixture
def memory_cache():
    """Empty process-local cache."""
    return MemoryCacheBackend()


@pytest.fixture
def key_builder():
    """Key builder with the default templates."""
    return KeyBuilder()


@pytest.fixture
def crud(sqlite_store, memory_cache, key_builder):
    """SyncCrud wired to a temporary store and a memory cache."""
    return SyncCrud(sqlite_store, memory_cache, key_builder)


@pytest.fixture
def make_record(key_builder):
    """Factory for records whose resource_key is the canonical key."""

    def _make(name, value="", culture="en-US", resource_group=None):
        return LocalizationRecord(
            name=name,
            value=value,
            culture_name=culture,
            resource_key=key_builder.compute_key(culture, resource_group, name),
        )

    return _make


@pytest.fixture
def flaky_cache_class():
    """Cache backend class that fails for selected keys."""
    return FlakyCacheBackend
