# SPDX-License-Identifier: MIT
"""Distributed cache backend over Redis."""

from typing import Any

import redis

from ..exceptions import CacheBackendError
from ..logging_config import get_detail_logger
from .base import CacheBackend


detail_logger = get_detail_logger()


class RedisCacheBackend(CacheBackend):
    """Cache shared by every process instance connected to the same Redis.

    Entries are written without expiry. Client failures are raised as
    ``CacheBackendError``; timeouts follow the client's own settings.
    """

    name = "redis"

    def __init__(self, client: Any, key_prefix: str = ""):
        self._client = client
        self.key_prefix = key_prefix

    @classmethod
    def from_url(
        cls, url: str, key_prefix: str = "", socket_timeout: float | None = None
    ) -> "RedisCacheBackend":
        """Create a backend with a client connected to ``url``."""
        detail_logger.debug(f"Creating Redis client for {url}")
        client = redis.Redis.from_url(
            url, decode_responses=True, socket_timeout=socket_timeout
        )
        return cls(client, key_prefix=key_prefix)

    def _full_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def get(self, key: str) -> str | None:
        try:
            value = self._client.get(self._full_key(key))
        except redis.RedisError as e:
            raise CacheBackendError(
                f"Redis GET failed: {e}", key=key, component=self.name
            ) from e

        if value is None:
            detail_logger.debug(f"Redis cache miss for key '{key}'")
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str) -> None:
        try:
            self._client.set(self._full_key(key), str(value))
        except redis.RedisError as e:
            raise CacheBackendError(
                f"Redis SET failed: {e}", key=key, component=self.name
            ) from e
        detail_logger.debug(f"Redis cache set for key '{key}'")

    def remove(self, key: str) -> None:
        try:
            self._client.delete(self._full_key(key))
        except redis.RedisError as e:
            raise CacheBackendError(
                f"Redis DEL failed: {e}", key=key, component=self.name
            ) from e
        detail_logger.debug(f"Redis cache remove for key '{key}'")

    def close(self) -> None:
        try:
            self._client.close()
        except redis.RedisError as e:
            detail_logger.debug(f"Error closing Redis client: {e}")
