"""
Tests for configuration management
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.infrastructure.configuration.config import Settings, get_config, reset_config


class TestSettings:
    """Test Settings model"""

    def test_settings_default_values(self):
        """Test settings with default values"""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite+aiosqlite:///data/orders.db"
        assert settings.sql_echo is False
        assert settings.log_level == "INFO"
        assert settings.environment == "development"
        assert settings.default_page_size == 10
        assert settings.costs_by_birthday_function == "get_costs_bdays"
        assert settings.avg_cost_by_hour_function == "get_avg_costs_by_hour"

    def test_settings_from_environment(self):
        """Test settings with custom values"""
        with patch.dict(os.environ, {
            'DATABASE_URL': 'postgresql+asyncpg://ledger@db/orders',
            'ENVIRONMENT': 'production',
            'LOG_LEVEL': 'ERROR',
            'SQL_ECHO': 'true',
            'COSTS_BY_BIRTHDAY_FUNCTION': 'reporting_costs_by_birthday',
        }):
            settings = Settings()

        assert settings.database_url == 'postgresql+asyncpg://ledger@db/orders'
        assert settings.environment == 'production'
        assert settings.log_level == 'ERROR'
        assert settings.sql_echo is True
        assert settings.costs_by_birthday_function == 'reporting_costs_by_birthday'

    def test_settings_mock_environment(self, mock_env):
        """Test the test environment is picked up"""
        settings = Settings()

        assert settings.database_url == mock_env['DATABASE_URL']
        assert settings.environment == 'test'

    def test_settings_validation_error(self):
        """Test an empty page size is rejected"""
        with pytest.raises(ValidationError):
            Settings(default_page_size=0)

    def test_settings_ignores_unknown_variables(self):
        """Test unrelated environment variables do not break loading"""
        with patch.dict(os.environ, {'SOMETHING_ELSE': 'value'}):
            settings = Settings()

        assert not hasattr(settings, 'something_else')


class TestGetConfig:
    """Test the cached settings accessor"""

    def test_get_config_is_cached(self):
        """Test repeated calls share one instance"""
        assert get_config() is get_config()

    def test_reset_config_rereads_environment(self):
        """Test reset picks up a changed environment"""
        # Setup
        first = get_config()

        # Execute
        with patch.dict(os.environ, {'LOG_LEVEL': 'WARNING'}):
            reset_config()
            second = get_config()

        # Verify
        assert second is not first
        assert first.log_level == 'DEBUG'
        assert second.log_level == 'WARNING'
