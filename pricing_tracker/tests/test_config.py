"""Tests for configuration management."""

import logging

import pytest

from pricing_tracker.utils import config as config_module
from pricing_tracker.utils.config import Config, get_config, get_database_url, reset_config


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Isolate each test from the environment and the singleton."""
    monkeypatch.delenv("PRICING_TRACKER_ENV", raising=False)
    monkeypatch.delenv("PRICING_TRACKER_DB_URL", raising=False)
    reset_config()
    yield
    reset_config()


class TestConfig:
    """Tests for the Config class."""

    def test_production_uses_documents_folder(self):
        """Production keeps the database under the user's Documents."""
        config = Config("production")
        assert config.is_production
        assert config.database_path.parent.name == "PricingTracker"
        assert config.database_path.name == "pricing_tracker.db"
        assert config.database_url.startswith("sqlite:///")
        assert config.uses_file_database

    def test_development_uses_project_data_dir(self):
        """Development keeps the database in the project's data/ directory."""
        config = Config("development")
        assert config.is_development
        assert config.database_path.parent.name == "data"

    def test_test_environment_is_in_memory(self):
        """The test environment never touches the disk."""
        config = Config("test")
        assert config.database_url == "sqlite:///:memory:"
        assert not config.uses_file_database

    def test_explicit_url_overrides(self):
        """An explicit URL wins over the environment default."""
        config = Config("production", database_url="sqlite:////tmp/other.db")
        assert config.database_url == "sqlite:////tmp/other.db"

    def test_url_from_environment(self, monkeypatch):
        """PRICING_TRACKER_DB_URL overrides the URL."""
        monkeypatch.setenv("PRICING_TRACKER_DB_URL", "sqlite:///:memory:")
        assert Config("production").database_url == "sqlite:///:memory:"

    def test_unknown_environment(self):
        """Unknown environments are rejected."""
        with pytest.raises(ValueError):
            Config("staging")

    def test_app_metadata(self):
        """Application metadata comes from constants."""
        config = Config("test")
        assert config.app_name == "Small Batch Pricing Tracker"
        assert config.app_version
        assert "test" in repr(config)


class TestConfigSingleton:
    """Tests for get_config() / reset_config()."""

    def test_singleton(self):
        """get_config returns the same instance until reset."""
        first = get_config("test")
        assert get_config() is first
        reset_config()
        assert get_config("test") is not first

    def test_environment_variable(self, monkeypatch):
        """The environment comes from PRICING_TRACKER_ENV."""
        monkeypatch.setenv("PRICING_TRACKER_ENV", "test")
        assert get_config().environment == "test"
        assert get_database_url() == "sqlite:///:memory:"

    def test_mismatched_environment_warns(self, caplog):
        """Asking for another environment keeps the singleton and warns."""
        get_config("test")

        with caplog.at_level(logging.WARNING, logger=config_module.__name__):
            config = get_config("development")

        assert config.environment == "test"
        assert "singleton already exists" in caplog.text
