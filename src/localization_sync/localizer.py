# SPDX-License-Identifier: MIT
"""Cache-backed string lookup with identity fallback."""

from typing import Any

from .cache.base import CacheBackend
from .exceptions import CacheBackendError, ConfigurationError
from .keys import KeyBuilder
from .logging_config import get_detail_logger
from .models import BulkLoadResult
from .sync.bulk_loader import BulkLoader


detail_logger = get_detail_logger()


class StringLocalizer:
    """Looks up localized strings for one culture and resource group.

    Reads go straight to the cache; there is no store read-through. A missing
    entry, or a cache failure, returns the lookup name unchanged.
    """

    def __init__(
        self,
        cache: CacheBackend | None,
        culture: str,
        resource_group: str | None = None,
        key_builder: KeyBuilder | None = None,
        loader: BulkLoader | None = None,
    ):
        """Create the localizer, warming the cache once when a loader is given.

        Raises:
            ConfigurationError: If no cache backend is supplied
        """
        if cache is None:
            raise ConfigurationError("A cache backend is required", component="lookup")

        self.cache = cache
        self.culture = str(culture)
        self.key_builder = key_builder or KeyBuilder()
        self.resource_group = self.key_builder.resolve_resource_group(resource_group)
        self.warm_result: BulkLoadResult | None = None

        if loader is not None:
            self.warm_result = loader.load_sync(self.culture, self.resource_group)

    @classmethod
    async def create(
        cls,
        cache: CacheBackend,
        culture: str,
        resource_group: str | None = None,
        key_builder: KeyBuilder | None = None,
        loader: BulkLoader | None = None,
    ) -> "StringLocalizer":
        """Async constructor for callers already inside an event loop."""
        localizer = cls(cache, culture, resource_group, key_builder)
        if loader is not None:
            localizer.warm_result = await loader.load(
                localizer.culture, localizer.resource_group
            )
        return localizer

    def get_string(self, name: str) -> str:
        """Return the localized value for ``name`` or ``name`` itself."""
        key = self.key_builder.compute_key(self.culture, self.resource_group, name)
        try:
            value = self.cache.get(key)
        except CacheBackendError as e:
            detail_logger.debug(f"Cache lookup failed for '{key}', falling back: {e}")
            return str(name)
        return str(name) if value is None else value

    def format(self, name: str, *args: Any) -> str:
        """Look up ``name`` and substitute positional arguments into it.

        A template that does not match the arguments, such as the name
        fallback or literal braces, is returned unformatted.
        """
        template = self.get_string(name)
        try:
            return template.format(*args)
        except (KeyError, IndexError, ValueError) as e:
            detail_logger.debug(f"Could not format '{name}': {e}")
            return template

    def __getitem__(self, name: str) -> str:
        return self.get_string(name)
