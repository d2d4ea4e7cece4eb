# SPDX-License-Identifier: MIT
"""Tests for the CLI module."""

import json
import logging

import pytest
import yaml
from click.testing import CliRunner

from localization_sync.cli import main
from localization_sync.config import AppConfig, StoreConfig
from localization_sync.exceptions import CacheBackendError, StoreError
from localization_sync.logging_config import DETAIL_LOGGER_NAME, STATUS_LOGGER_NAME
from localization_sync.service import LocalizationService, set_service


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run every command from a temporary directory and drop its log handlers."""
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    for name in (DETAIL_LOGGER_NAME, STATUS_LOGGER_NAME):
        logger = logging.getLogger(name)
        for handler in logger.handlers[:]:
            handler.close()
        logger.handlers.clear()


@pytest.fixture
def service(tmp_path):
    """Global service on a temporary database."""
    service = LocalizationService(
        AppConfig(store=StoreConfig(path=str(tmp_path / "cli.db")))
    )
    set_service(service)
    return service


WELCOME_KEY = "Localization:en-US:SharedResource:Welcome"


class TestVersionAndConfig:
    """Test cases for --version and the config command."""

    def test_version(self, runner):
        """Test that --version prints the version and exits."""
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "Localization-Sync version" in result.output

    def test_config_command(self, runner, tmp_path):
        """Test that the config command prints the merged configuration."""
        config_file = tmp_path / "custom.yaml"
        config_file.write_text(yaml.dump({"cache": {"key_prefix": "shop:"}}))

        result = runner.invoke(main, ["--config", str(config_file), "config"])

        assert result.exit_code == 0
        data = yaml.safe_load(result.output)
        assert data["cache"]["key_prefix"] == "shop:"
        assert data["store"]["backend"] == "sqlite"


class TestWriteCommands:
    """Test cases for insert, update, delete and import."""

    def test_insert(self, runner, service):
        """Test that insert stores and caches the value."""
        result = runner.invoke(main, ["insert", "Welcome", "Hello", "-c", "en-US"])

        assert result.exit_code == 0
        assert "Insert: 1 entries synced" in result.output
        assert service.cache.get(WELCOME_KEY) == "Hello"

    def test_insert_with_resource(self, runner, service):
        """Test that --resource selects the group."""
        result = runner.invoke(
            main, ["insert", "Pay", "Payer", "-c", "fr-FR", "-r", "Checkout"]
        )

        assert result.exit_code == 0
        assert service.cache.get("Localization:fr-FR:Checkout:Pay") == "Payer"

    def test_insert_requires_culture(self, runner, service):
        """Test that the culture option is mandatory."""
        result = runner.invoke(main, ["insert", "Welcome", "Hello"])

        assert result.exit_code != 0
        assert "--culture" in result.output

    def test_update_missing(self, runner, service):
        """Test that updating an absent entry reports nothing to do."""
        result = runner.invoke(main, ["update", "Ghost", "Boo", "-c", "en-US"])

        assert result.exit_code == 0
        assert "Nothing to update" in result.output

    def test_delete_many(self, runner, service):
        """Test that several names are deleted in one batch."""
        service.crud.insert_many({"a": "1", "b": "2", "c": "3"}, "en-US")

        result = runner.invoke(main, ["delete", "a", "b", "-c", "en-US"])

        assert result.exit_code == 0
        assert "Delete: 2 entries synced" in result.output
        assert service.store.count() == 1

    def test_import(self, runner, service, tmp_path):
        """Test that a JSON object file is imported without overwriting."""
        service.crud.insert("Welcome", "Hello", "en-US")
        pairs_file = tmp_path / "pairs.json"
        pairs_file.write_text(
            json.dumps({"Welcome": "Hi", "Bye": "Ciao"}), encoding="utf-8"
        )

        result = runner.invoke(main, ["import", str(pairs_file), "-c", "en-US"])

        assert result.exit_code == 0
        assert "Import: 1 entries synced" in result.output
        assert service.cache.get(WELCOME_KEY) == "Hello"

    def test_import_rejects_array(self, runner, service, tmp_path):
        """Test that a malformed import file exits with an error."""
        pairs_file = tmp_path / "pairs.json"
        pairs_file.write_text("[1, 2]", encoding="utf-8")

        result = runner.invoke(main, ["import", str(pairs_file), "-c", "en-US"])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_store_error_exits_with_error(self, runner, service, monkeypatch):
        """Test that store failures are reported and exit with status 1."""

        def broken_insert(*args, **kwargs):
            raise StoreError("database is locked")

        monkeypatch.setattr(service.crud, "insert", broken_insert)

        result = runner.invoke(main, ["insert", "Welcome", "Hello", "-c", "en-US"])

        assert result.exit_code == 1
        assert "database is locked" in result.output

    def test_cache_failure_is_reported(self, runner, service, monkeypatch):
        """Test that stale cache entries are listed after a write."""

        def broken_set(key, value):
            raise CacheBackendError("down", key=key)

        monkeypatch.setattr(service.cache, "set", broken_set)

        result = runner.invoke(main, ["insert", "Welcome", "Hello", "-c", "en-US"])

        assert result.exit_code == 0
        assert f"Stored but not cached: {WELCOME_KEY}" in result.output


class TestReadCommands:
    """Test cases for get, export and warm."""

    def test_get_found(self, runner, service):
        """Test that get prints the localized value."""
        service.crud.insert("Welcome", "Hello", "en-US")

        result = runner.invoke(main, ["get", "Welcome", "-c", "en-US"])

        assert result.exit_code == 0
        assert result.output.strip().splitlines()[-1] == "Hello"

    def test_get_missing_prints_name(self, runner, service):
        """Test that a missing entry prints the lookup name."""
        result = runner.invoke(main, ["get", "Missing", "-c", "en-US", "--no-warm"])

        assert result.exit_code == 0
        assert result.output.strip() == "Missing"

    def test_get_from_snapshot_without_directory(self, runner, service):
        """Test that snapshot warm-up without a directory fails cleanly."""
        result = runner.invoke(
            main, ["get", "Welcome", "-c", "en-US", "--from-snapshot"]
        )

        assert result.exit_code == 1
        assert "snapshot.directory" in result.output

    def test_export_json(self, runner, service):
        """Test that export writes the group's records as JSON."""
        service.crud.insert_many({"a": "1", "b": "2"}, "en-US", "Menu")
        service.crud.insert("a", "other", "en-US")

        result = runner.invoke(main, ["export", "-c", "en-US", "-r", "Menu"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [item["name"] for item in data] == ["a", "b"]
        assert data[0]["resourceKey"] == "Localization:en-US:Menu:a"

    def test_export_xml_to_file(self, runner, service, tmp_path):
        """Test that export writes XML to the requested file."""
        service.crud.insert("Welcome", "Hello", "en-US")
        output = tmp_path / "out" / "en-US.xml"

        result = runner.invoke(
            main, ["export", "-c", "en-US", "--format", "xml", "-o", str(output)]
        )

        assert result.exit_code == 0
        assert "<Value>Hello</Value>" in output.read_text(encoding="utf-8")
        assert "Exported 1 record(s)" in result.output

    def test_warm(self, runner, service):
        """Test that warm loads every stored entry of the group."""
        service.crud.insert_many({"a": "1", "b": "2"}, "en-US")
        service.cache.remove("Localization:en-US:SharedResource:a")

        result = runner.invoke(main, ["warm", "-c", "en-US"])

        assert result.exit_code == 0
        assert "2 entries loaded" in result.output
        assert service.cache.get("Localization:en-US:SharedResource:a") == "1"

    def test_warm_partial_failure_exits_with_error(
        self, runner, service, monkeypatch
    ):
        """Test that an incomplete warm-up lists failures and exits with 1."""
        service.crud.insert("Welcome", "Hello", "en-US")

        def broken_set(key, value):
            raise CacheBackendError("down", key=key)

        monkeypatch.setattr(service.cache, "set", broken_set)

        result = runner.invoke(main, ["warm", "-c", "en-US"])

        assert result.exit_code == 1
        assert WELCOME_KEY in result.output
