# SPDX-License-Identifier: MIT
"""Constants used throughout the localization sync layer.

This module centralizes the defaults for:

- **Key derivation**: cache key and path templates, substituted positionally
  with culture, resource group and record name
- **Snapshot files**: naming of per-culture XML snapshot files
- **Bulk warm-up**: fan-out width for concurrent cache writes
"""

# Resource group used when a caller passes an empty or missing group
SHARED_RESOURCE_NAME: str = "SharedResource"

# {0} = culture, {1} = resource group, {2} = record name
DEFAULT_KEY_TEMPLATE: str = "Localization:{0}:{1}:{2}"
# {0} = culture, {1} = resource group; every key for the pair contains this path
DEFAULT_PATH_TEMPLATE: str = "Localization:{0}:{1}:"

# {0} = culture, {1} = resource group
DEFAULT_SNAPSHOT_FILE_TEMPLATE: str = "{1}.{0}.xml"

DEFAULT_CACHE_BACKEND: str = "memory"
DEFAULT_STORE_BACKEND: str = "sqlite"
DEFAULT_REDIS_URL: str = "redis://localhost:6379/0"
DEFAULT_DB_FILENAME: str = "localization.db"

DEFAULT_BULK_LOAD_CONCURRENCY: int = 32

# XML export element names
XML_ROOT_ELEMENT: str = "ArrayOfLocalizationRecord"
XML_RECORD_ELEMENT: str = "LocalizationRecord"
