# SPDX-License-Identifier: MIT
"""Cache backends for localized string lookups.

- CacheBackend: get/set/remove contract
- MemoryCacheBackend: process-local variant
- RedisCacheBackend: distributed variant
- create_cache_backend: the single place that selects a variant from config
"""

from ..config import CacheConfig
from ..enums import CacheBackendType
from ..exceptions import ConfigurationError
from ..logging_config import get_detail_logger
from .base import CacheBackend
from .memory import MemoryCacheBackend
from .redis_cache import RedisCacheBackend


detail_logger = get_detail_logger()


def create_cache_backend(cache_config: CacheConfig) -> CacheBackend:
    """Create the one cache backend selected by configuration.

    Args:
        cache_config: Cache section of the application configuration

    Returns:
        The configured cache backend

    Raises:
        ConfigurationError: If the backend type is unknown or misconfigured
    """
    backend_type = CacheBackendType(cache_config.backend)
    detail_logger.debug(f"Selecting cache backend: {backend_type.value}")

    if backend_type is CacheBackendType.MEMORY:
        return MemoryCacheBackend()
    if backend_type is CacheBackendType.REDIS:
        if not cache_config.redis_url:
            raise ConfigurationError(
                "Redis cache selected but 'cache.redis_url' is empty", component="cache"
            )
        return RedisCacheBackend.from_url(
            cache_config.redis_url,
            key_prefix=cache_config.key_prefix,
            socket_timeout=cache_config.socket_timeout,
        )

    raise ConfigurationError(
        f"Unsupported cache backend: {backend_type.value}", component="cache"
    )


__all__ = [
    "CacheBackend",
    "MemoryCacheBackend",
    "RedisCacheBackend",
    "create_cache_backend",
]
