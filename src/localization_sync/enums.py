# SPDX-License-Identifier: MIT
"""Enums for the localization sync layer."""

from enum import Enum


class CacheBackendType(str, Enum):
    """Cache backend variants; exactly one is active per deployment."""

    MEMORY = "memory"
    REDIS = "redis"


class StoreBackendType(str, Enum):
    """Durable record store variants."""

    SQLITE = "sqlite"
    XML = "xml"


class LookupOutcome(str, Enum):
    """Result of the existence check that drives insert-or-update."""

    FOUND = "found"
    NOT_FOUND = "not_found"


class FailurePolicy(str, Enum):
    """How the bulk loader treats individual cache write failures."""

    IGNORE = "ignore"
    COLLECT = "collect"


class ExportFormat(str, Enum):
    """Serialization formats for record snapshots."""

    JSON = "json"
    XML = "xml"
