# SPDX-License-Identifier: MIT
"""Process-local in-memory cache backend."""

import threading

from ..logging_config import get_detail_logger
from .base import CacheBackend


detail_logger = get_detail_logger()


class MemoryCacheBackend(CacheBackend):
    """In-process cache; not shared across processes."""

    name = "memory"

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            value = self._entries.get(key)

        if value is None:
            detail_logger.debug(f"Memory cache miss for key '{key}'")
        return value

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._entries[key] = str(value)
        detail_logger.debug(f"Memory cache set for key '{key}'")

    def remove(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)
        detail_logger.debug(f"Memory cache remove for key '{key}'")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
