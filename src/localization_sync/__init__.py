# SPDX-License-Identifier: MIT
"""Localization Sync - culture-specific strings with a write-through cache."""

from importlib.metadata import PackageNotFoundError, version

from .keys import KeyBuilder
from .models import LocalizationRecord
from .sync import BulkLoader, SyncCrud


__all__: list[str] = [
    "BulkLoader",
    "KeyBuilder",
    "LocalizationRecord",
    "SyncCrud",
    "__version__",
]

# Get version from installed package metadata
__version__: str
try:
    __version__ = version("localization-sync")
except PackageNotFoundError:
    # Package is not installed, use development fallback
    __version__ = "development"
