# SPDX-License-Identifier: MIT
"""Cache backend contract shared by the local and distributed variants."""

from abc import ABC, abstractmethod


class CacheBackend(ABC):
    """Flat string-to-string cache addressed by canonical keys.

    Implementations must agree on observable semantics: ``set`` is
    last-writer-wins, ``remove`` of a missing key is not an error and ``get``
    returns ``None`` for a missing key (distinct from an empty string value).
    There is no enumeration and no expiry.
    """

    name: str = "cache"

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the cached value or None when absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove a key; removing an absent key is a no-op."""

    def close(self) -> None:
        """Release backend resources."""
        return None
