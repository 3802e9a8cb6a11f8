"""Unit tests for Config class configuration properties.

Each property is tested for:
- Default values when no environment variables set
- Environment variable overrides
- Invalid value handling (fallback to defaults with warning)
"""

import logging
from pathlib import Path

import pytest
from src.utils.config import Config, get_config, reset_config


class TestDatabaseConfigProperties:
    """Tests for database configuration properties."""

    def test_db_timeout_default(self):
        """Default db_timeout is 30."""
        config = Config()
        assert config.db_timeout == 30

    def test_db_timeout_env_override(self, monkeypatch):
        monkeypatch.setenv("RECIPE_ARR_DB_TIMEOUT", "60")
        assert Config().db_timeout == 60

    def test_db_timeout_invalid_uses_default(self, monkeypatch, caplog):
        monkeypatch.setenv("RECIPE_ARR_DB_TIMEOUT", "invalid")
        with caplog.at_level(logging.WARNING):
            config = Config()
            assert config.db_timeout == 30
        assert "Invalid RECIPE_ARR_DB_TIMEOUT" in caplog.text

    def test_db_timeout_zero_uses_default(self, monkeypatch):
        monkeypatch.setenv("RECIPE_ARR_DB_TIMEOUT", "0")
        assert Config().db_timeout == 30

    def test_db_path_override(self, monkeypatch, tmp_path):
        db_file = tmp_path / "arr.db"
        monkeypatch.setenv("RECIPE_ARR_DB_PATH", str(db_file))
        config = Config()
        assert config.database_path == db_file
        assert config.database_url.startswith("sqlite:///")
        assert config.database_url.endswith("/arr.db")

    def test_db_url_takes_precedence(self, monkeypatch, tmp_path):
        monkeypatch.setenv("RECIPE_ARR_DB_PATH", str(tmp_path / "ignored.db"))
        monkeypatch.setenv("RECIPE_ARR_DB_URL", "sqlite:///:memory:")
        assert Config().database_url == "sqlite:///:memory:"

    def test_development_uses_project_data_dir(self):
        config = Config("development")
        assert config.is_development
        assert config.database_path.parent.name == "data"

    def test_production_uses_documents_dir(self):
        config = Config("production")
        assert config.is_production
        assert config.database_path.parent == Path.home() / "Documents" / "RecipeARR"

    def test_unknown_environment_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            config = Config("staging")
        assert config.environment == "production"
        assert "Unknown environment" in caplog.text


class TestDisplayConfigProperties:
    """Tests for currency and amount display settings."""

    def test_currency_default(self):
        assert Config().currency == "IDR"

    def test_currency_override_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("RECIPE_ARR_CURRENCY", "usd")
        assert Config().currency == "USD"

    def test_currency_unknown_uses_default(self, monkeypatch, caplog):
        monkeypatch.setenv("RECIPE_ARR_CURRENCY", "XYZ")
        with caplog.at_level(logging.WARNING):
            assert Config().currency == "IDR"
        assert "Invalid RECIPE_ARR_CURRENCY" in caplog.text

    def test_amount_decimals_default(self):
        assert Config().amount_decimals == 2

    def test_amount_decimals_override(self, monkeypatch):
        monkeypatch.setenv("RECIPE_ARR_AMOUNT_DECIMALS", "3")
        assert Config().amount_decimals == 3

    @pytest.mark.parametrize("raw", ["-1", "11", "two"])
    def test_amount_decimals_invalid(self, monkeypatch, raw):
        monkeypatch.setenv("RECIPE_ARR_AMOUNT_DECIMALS", raw)
        assert Config().amount_decimals == 2

    def test_log_level(self, monkeypatch):
        assert Config().log_level == "INFO"
        monkeypatch.setenv("RECIPE_ARR_LOG_LEVEL", "debug")
        assert Config().log_level == "DEBUG"
        monkeypatch.setenv("RECIPE_ARR_LOG_LEVEL", "verbose")
        assert Config().log_level == "INFO"


class TestConfigSingleton:
    """Tests for get_config() and reset_config()."""

    def test_singleton(self):
        assert get_config() is get_config()

    def test_environment_from_env(self, monkeypatch):
        monkeypatch.setenv("RECIPE_ARR_ENV", "development")
        assert get_config().environment == "development"

    def test_second_environment_ignored(self, caplog):
        first = get_config("production")
        with caplog.at_level(logging.WARNING):
            second = get_config("development")
        assert second is first
        assert "Returning existing singleton" in caplog.text

    def test_reset(self):
        first = get_config()
        reset_config()
        assert get_config() is not first
