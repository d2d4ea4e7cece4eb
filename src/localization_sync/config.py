# SPDX-License-Identifier: MIT
"""Configuration management for the localization sync layer."""

import copy
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from .constants import (
    DEFAULT_BULK_LOAD_CONCURRENCY,
    DEFAULT_CACHE_BACKEND,
    DEFAULT_KEY_TEMPLATE,
    DEFAULT_PATH_TEMPLATE,
    DEFAULT_REDIS_URL,
    DEFAULT_SNAPSHOT_FILE_TEMPLATE,
    DEFAULT_STORE_BACKEND,
    SHARED_RESOURCE_NAME,
)
from .enums import CacheBackendType, FailurePolicy, StoreBackendType


ENV_PREFIX = "LOCALIZATION_SYNC_"


class KeyConfig(BaseModel):
    """Templates used to derive canonical cache keys and path fragments."""

    key_template: str = Field(
        DEFAULT_KEY_TEMPLATE,
        description="Positional template: {0}=culture, {1}=resource group, {2}=name",
    )
    path_template: str = Field(
        DEFAULT_PATH_TEMPLATE,
        description="Positional template: {0}=culture, {1}=resource group",
    )
    shared_resource_name: str = Field(
        SHARED_RESOURCE_NAME, min_length=1, description="Default resource group"
    )


class CacheConfig(BaseModel):
    """Selects the single active cache backend."""

    backend: CacheBackendType = Field(
        CacheBackendType(DEFAULT_CACHE_BACKEND), description="memory or redis"
    )
    redis_url: str = Field(DEFAULT_REDIS_URL, description="Redis connection URL")
    key_prefix: str = Field("", description="Prefix applied to keys in Redis")
    socket_timeout: float | None = Field(
        5.0, gt=0, description="Redis socket timeout in seconds"
    )


class StoreConfig(BaseModel):
    """Durable record store settings."""

    backend: StoreBackendType = Field(
        StoreBackendType(DEFAULT_STORE_BACKEND), description="sqlite or xml"
    )
    path: str | None = Field(
        None,
        description="Database or XML file path; defaults under .localization-sync/",
    )


class SnapshotConfig(BaseModel):
    """Location of serialized record snapshots used for cache warm-up."""

    directory: str | None = Field(
        None, description="Directory holding snapshot files"
    )
    file_template: str = Field(
        DEFAULT_SNAPSHOT_FILE_TEMPLATE,
        description="Positional template: {0}=culture, {1}=resource group",
    )


class BulkLoadConfig(BaseModel):
    """Cache warm-up fan-out settings."""

    max_concurrency: int = Field(
        DEFAULT_BULK_LOAD_CONCURRENCY, ge=1, description="Concurrent cache writes"
    )
    failure_policy: FailurePolicy = Field(
        FailurePolicy.COLLECT, description="ignore or collect failed writes"
    )


class AppConfig(BaseModel):
    """Main application configuration."""

    keys: KeyConfig = KeyConfig()
    cache: CacheConfig = CacheConfig()
    store: StoreConfig = StoreConfig()
    snapshot: SnapshotConfig = SnapshotConfig()
    bulk_load: BulkLoadConfig = BulkLoadConfig()


class ConfigManager:
    """Manages application configuration from files and environment."""

    def __init__(self, config_path: Path | None = None):
        self.config_path = config_path or self._find_config_file()
        self._config: AppConfig | None = None

    def _find_config_file(self) -> Path | None:
        """Find configuration file in standard locations."""
        search_paths = [
            Path.cwd() / ".localization-sync" / "config.yaml",
            Path.cwd() / "config" / "config.yaml",
            Path.cwd() / "config.yaml",
            Path.home() / ".config" / "localization-sync" / "config.yaml",
            Path("/etc/localization-sync/config.yaml"),
        ]

        for path in search_paths:
            if path.exists():
                return path

        return None

    def load_config(self) -> AppConfig:
        """Load configuration from file or create default."""
        if self._config is not None:
            return self._config

        default_config = self.get_default_config()

        if self.config_path and self.config_path.exists():
            with open(self.config_path, encoding="utf-8") as f:
                file_config = yaml.safe_load(f) or {}

            config_data = self._deep_merge_configs(default_config, file_config)
        else:
            config_data = default_config

        config_data = self._apply_env_overrides(config_data)

        self._config = AppConfig(**config_data)
        return self._config

    def _deep_merge_configs(
        self, default_config: dict[str, Any], override_config: dict[str, Any]
    ) -> dict[str, Any]:
        """Deep merge override config into default config.

        Sections are merged key by key so a file may override a single setting
        (e.g. ``cache.backend``) and keep the defaults for the rest.

        Args:
            default_config: Base configuration with all defaults
            override_config: User-provided overrides

        Returns:
            Merged configuration
        """
        result = copy.deepcopy(default_config)

        for key, value in override_config.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key].update(value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config_data: dict[str, Any]) -> dict[str, Any]:
        """Apply environment variable overrides to config."""
        # Example: LOCALIZATION_SYNC_CACHE_BACKEND=redis
        overrides = {
            "CACHE_BACKEND": ("cache", "backend"),
            "CACHE_REDIS_URL": ("cache", "redis_url"),
            "CACHE_KEY_PREFIX": ("cache", "key_prefix"),
            "STORE_BACKEND": ("store", "backend"),
            "STORE_PATH": ("store", "path"),
            "SNAPSHOT_DIRECTORY": ("snapshot", "directory"),
        }

        for suffix, (section, field) in overrides.items():
            value = os.environ.get(ENV_PREFIX + suffix)
            if value is not None:
                config_data.setdefault(section, {})[field] = value

        return config_data

    def get_complete_config_dict(self) -> dict[str, Any]:
        """Get the complete configuration as a dictionary for display."""
        config = self.load_config()
        return config.model_dump(mode="json")

    def show_config(self) -> str:
        """Show the complete configuration in YAML format.

        Returns:
            YAML formatted configuration string
        """
        config_dict = self.get_complete_config_dict()
        return yaml.dump(config_dict, default_flow_style=False, sort_keys=False)

    def get_default_config(self) -> dict[str, Any]:
        """Get default configuration as a plain dictionary."""
        return AppConfig().model_dump(mode="json")

    def create_default_config(self, output_path: Path) -> None:
        """Write the default configuration to a YAML file."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            yaml.dump(
                self.get_default_config(), f, default_flow_style=False, sort_keys=False
            )


# Global config manager instance with factory pattern
_config_manager_instance: ConfigManager | None = None


def get_config_manager(config_path: Path | None = None) -> ConfigManager:
    """Get or create the global config manager instance.

    Args:
        config_path: Optional path to config file (only used on first call)

    Returns:
        The global ConfigManager instance
    """
    global _config_manager_instance
    if _config_manager_instance is None:
        _config_manager_instance = ConfigManager(config_path)
    return _config_manager_instance


def set_config_manager(manager: ConfigManager) -> None:
    """Set the config manager instance (primarily for testing).

    Args:
        manager: ConfigManager instance to use globally
    """
    global _config_manager_instance
    _config_manager_instance = manager


def reset_config_manager() -> None:
    """Reset the config manager instance (primarily for testing)."""
    global _config_manager_instance
    _config_manager_instance = None
