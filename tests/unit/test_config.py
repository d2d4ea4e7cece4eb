# SPDX-License-Identifier: MIT
"""Tests for configuration management."""

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from pydantic import ValidationError

from localization_sync.config import (
    AppConfig,
    BulkLoadConfig,
    ConfigManager,
    get_config_manager,
    reset_config_manager,
    set_config_manager,
)
from localization_sync.enums import CacheBackendType, FailurePolicy, StoreBackendType


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any LOCALIZATION_SYNC_* variables from the environment."""
    for suffix in [
        "CACHE_BACKEND",
        "CACHE_REDIS_URL",
        "CACHE_KEY_PREFIX",
        "STORE_BACKEND",
        "STORE_PATH",
        "SNAPSHOT_DIRECTORY",
    ]:
        monkeypatch.delenv(f"LOCALIZATION_SYNC_{suffix}", raising=False)
    return monkeypatch


class TestConfigModels:
    """Test cases for the configuration models."""

    def test_defaults(self):
        """Test the default configuration values."""
        config = AppConfig()

        assert config.keys.key_template == "Localization:{0}:{1}:{2}"
        assert config.keys.path_template == "Localization:{0}:{1}:"
        assert config.keys.shared_resource_name == "SharedResource"
        assert config.cache.backend is CacheBackendType.MEMORY
        assert config.store.backend is StoreBackendType.SQLITE
        assert config.snapshot.directory is None
        assert config.bulk_load.failure_policy is FailurePolicy.COLLECT

    def test_concurrency_must_be_positive(self):
        """Test that a zero concurrency limit is rejected."""
        with pytest.raises(ValidationError):
            BulkLoadConfig(max_concurrency=0)


class TestConfigManager:
    """Test cases for ConfigManager."""

    def test_load_without_file(self, clean_env):
        """Test loading defaults when no config file exists."""
        manager = ConfigManager(config_path=Path("/nonexistent/config.yaml"))
        assert manager.load_config() == AppConfig()

    def test_load_merges_partial_file(self, temp_config_dir, clean_env):
        """Test that a file overriding one setting keeps the other defaults."""
        config_file = temp_config_dir / "config.yaml"
        config_file.write_text(
            yaml.dump(
                {
                    "cache": {"backend": "redis", "key_prefix": "shop:"},
                    "bulk_load": {"max_concurrency": 8},
                }
            )
        )

        config = ConfigManager(config_file).load_config()

        assert config.cache.backend is CacheBackendType.REDIS
        assert config.cache.key_prefix == "shop:"
        assert config.cache.redis_url == "redis://localhost:6379/0"
        assert config.bulk_load.max_concurrency == 8
        assert config.bulk_load.failure_policy is FailurePolicy.COLLECT

    def test_empty_file(self, temp_config_dir, clean_env):
        """Test that an empty file yields the defaults."""
        config_file = temp_config_dir / "config.yaml"
        config_file.write_text("")

        assert ConfigManager(config_file).load_config() == AppConfig()

    def test_config_is_cached(self, clean_env):
        """Test that load_config returns the same instance on repeat calls."""
        manager = ConfigManager(config_path=Path("/nonexistent/config.yaml"))
        assert manager.load_config() is manager.load_config()

    def test_env_overrides(self, temp_config_dir, clean_env):
        """Test that environment variables override file settings."""
        config_file = temp_config_dir / "config.yaml"
        config_file.write_text(yaml.dump({"cache": {"backend": "memory"}}))
        clean_env.setenv("LOCALIZATION_SYNC_CACHE_BACKEND", "redis")
        clean_env.setenv("LOCALIZATION_SYNC_CACHE_REDIS_URL", "redis://cache:6380/2")
        clean_env.setenv("LOCALIZATION_SYNC_STORE_BACKEND", "xml")
        clean_env.setenv("LOCALIZATION_SYNC_STORE_PATH", "/data/records.xml")
        clean_env.setenv("LOCALIZATION_SYNC_SNAPSHOT_DIRECTORY", "/data/snapshots")

        config = ConfigManager(config_file).load_config()

        assert config.cache.backend is CacheBackendType.REDIS
        assert config.cache.redis_url == "redis://cache:6380/2"
        assert config.store.backend is StoreBackendType.XML
        assert config.store.path == "/data/records.xml"
        assert config.snapshot.directory == "/data/snapshots"

    def test_invalid_backend_rejected(self, temp_config_dir, clean_env):
        """Test that an unknown cache backend fails validation."""
        config_file = temp_config_dir / "config.yaml"
        config_file.write_text(yaml.dump({"cache": {"backend": "memcached"}}))

        with pytest.raises(ValidationError):
            ConfigManager(config_file).load_config()

    def test_find_config_file_in_cwd(self, tmp_path):
        """Test that .localization-sync/config.yaml in cwd is discovered."""
        config_file = tmp_path / ".localization-sync" / "config.yaml"
        config_file.parent.mkdir()
        config_file.write_text("{}")

        with patch("pathlib.Path.cwd", return_value=tmp_path):
            manager = ConfigManager()

        assert manager.config_path == config_file

    def test_show_config(self, clean_env):
        """Test that the full configuration is rendered as YAML."""
        manager = ConfigManager(config_path=Path("/nonexistent/config.yaml"))
        data = yaml.safe_load(manager.show_config())

        assert data["cache"]["backend"] == "memory"
        assert data["keys"]["shared_resource_name"] == "SharedResource"
        assert list(data) == ["keys", "cache", "store", "snapshot", "bulk_load"]

    def test_create_default_config(self, temp_config_dir, clean_env):
        """Test that the default configuration can be written and read back."""
        output = temp_config_dir / "nested" / "config.yaml"
        manager = ConfigManager(config_path=Path("/nonexistent/config.yaml"))

        manager.create_default_config(output)

        assert ConfigManager(output).load_config() == AppConfig()


class TestGlobalConfigManager:
    """Test cases for the global config manager accessors."""

    def test_get_returns_singleton(self):
        """Test that repeated calls return the same manager."""
        assert get_config_manager() is get_config_manager()

    def test_set_and_reset(self):
        """Test replacing and resetting the global manager."""
        manager = ConfigManager(config_path=Path("/nonexistent/config.yaml"))
        set_config_manager(manager)
        assert get_config_manager() is manager

        reset_config_manager()
        assert get_config_manager() is not manager
