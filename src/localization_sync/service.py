# SPDX-License-Identifier: MIT
"""Composition of store, cache and sync layer from configuration."""

from pathlib import Path

from .cache import create_cache_backend
from .cache.base import CacheBackend
from .config import AppConfig, get_config_manager
from .exceptions import ConfigurationError
from .keys import KeyBuilder
from .localizer import StringLocalizer
from .logging_config import get_detail_logger
from .store import create_record_store
from .store.base import RecordStore
from .sync import (
    BulkLoader,
    SnapshotSource,
    StoreSnapshotSource,
    SyncCrud,
    XmlSnapshotSource,
)


detail_logger = get_detail_logger()


class LocalizationService:
    """Facade wiring one record store and one cache backend together.

    The cache backend is chosen once, from configuration, when the service is
    built; nothing downstream branches on the backend type.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        store: RecordStore | None = None,
        cache: CacheBackend | None = None,
    ):
        self.config = config or get_config_manager().load_config()
        self.key_builder = KeyBuilder.from_config(self.config.keys)
        self.store = store or create_record_store(self.config.store)
        self.cache = cache or create_cache_backend(self.config.cache)
        self.crud = SyncCrud(self.store, self.cache, self.key_builder)
        detail_logger.debug(
            f"Localization service ready: store={self.store.name}, "
            f"cache={self.cache.name}"
        )

    def snapshot_source(self, from_snapshot: bool = False) -> SnapshotSource:
        """Return the warm-up source: the XML snapshot directory or the store."""
        if not from_snapshot:
            return StoreSnapshotSource(self.store, self.key_builder)

        directory = self.config.snapshot.directory
        if not directory:
            raise ConfigurationError(
                "Snapshot warm-up requested but 'snapshot.directory' is not set",
                component="snapshot",
            )
        return XmlSnapshotSource(
            Path(directory), self.config.snapshot.file_template, self.key_builder
        )

    def bulk_loader(self, from_snapshot: bool = False) -> BulkLoader:
        return BulkLoader(
            self.cache,
            self.snapshot_source(from_snapshot),
            self.key_builder,
            max_concurrency=self.config.bulk_load.max_concurrency,
            failure_policy=self.config.bulk_load.failure_policy,
        )

    def create_localizer(
        self,
        culture: str,
        resource_group: str | None = None,
        warm: bool = True,
        from_snapshot: bool = False,
    ) -> StringLocalizer:
        """Build a lookup facade, warming the cache once unless ``warm`` is False."""
        loader = self.bulk_loader(from_snapshot) if warm else None
        return StringLocalizer(
            self.cache, culture, resource_group, self.key_builder, loader
        )

    def close(self) -> None:
        self.store.close()
        self.cache.close()


# Global service instance with factory pattern
_service_instance: LocalizationService | None = None


def get_service() -> LocalizationService:
    """Get or create the global localization service.

    Returns:
        The global LocalizationService instance
    """
    global _service_instance
    if _service_instance is None:
        _service_instance = LocalizationService()
    return _service_instance


def set_service(service: LocalizationService) -> None:
    """Set the service instance (primarily for testing)."""
    global _service_instance
    _service_instance = service


def reset_service() -> None:
    """Reset the service instance (primarily for testing)."""
    global _service_instance
    if _service_instance is not None:
        _service_instance.close()
    _service_instance = None
