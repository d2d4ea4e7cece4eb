# SPDX-License-Identifier: MIT
"""Standard exceptions for the localization sync layer."""


class LocalizationSyncError(Exception):
    """Base class for all localization sync exceptions."""

    def __init__(self, message: str, component: str | None = None) -> None:
        self.component = component
        super().__init__(message)


class ConfigurationError(LocalizationSyncError):
    """Raised when a required dependency or setting is missing at construction."""

    pass


class StoreError(LocalizationSyncError):
    """Raised when the durable record store fails (connectivity, constraints, I/O)."""

    pass


class CacheBackendError(LocalizationSyncError):
    """Raised when a cache backend round trip fails."""

    def __init__(
        self, message: str, key: str | None = None, component: str | None = None
    ) -> None:
        self.key = key
        msg = f"{message} (key: {key})" if key else message
        super().__init__(msg, component)
