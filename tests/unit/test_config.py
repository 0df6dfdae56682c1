"""
Unit tests for configuration loading.

Tests config.yaml validation and how file values combine with environment
variables.
"""

import pytest
from pydantic import ValidationError

from casedesk.config import (
    APISettings,
    DEFAULT_CONFIG,
    load_yaml_config,
    write_default_config,
    yaml_overrides,
)
from casedesk.config_schema import get_validation_errors, validate_config


class TestConfigSchema:
    """Test config.yaml validation."""

    def test_default_config_is_valid(self, tmp_path):
        path = write_default_config(str(tmp_path / "config.yaml"))
        config = validate_config(load_yaml_config(str(path)))
        assert config.rate_limits.auth == "5/15minutes"
        assert config.security.refresh_token_expire_days == 7

    def test_empty_config_uses_defaults(self):
        config = validate_config({})
        assert config.application.environment == "development"
        assert config.database.url is None

    def test_invalid_timezone(self):
        errors = get_validation_errors({"application": {"timezone": "Mars/Olympus"}})
        assert len(errors) == 1
        assert "timezone" in errors[0]

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            validate_config({"application": {"logging": {"level": "LOUD"}}})

    def test_token_lifetime_bounds(self):
        errors = get_validation_errors({"security": {"refresh_token_expire_days": 0}})
        assert errors


class TestYamlOverrides:
    """Test file values against environment variables."""

    def test_missing_file(self, tmp_path):
        assert load_yaml_config(str(tmp_path / "absent.yaml")) == {}

    def test_file_values_flattened(self, monkeypatch):
        monkeypatch.delenv("CASEDESK_DATABASE_URL", raising=False)
        monkeypatch.delenv("CASEDESK_LOG_LEVEL", raising=False)
        overrides = yaml_overrides(
            {"database": {"url": "sqlite:///./other.db"}, "application": {"logging": {"level": "DEBUG"}}}
        )
        assert overrides["database_url"] == "sqlite:///./other.db"
        assert overrides["log_level"] == "DEBUG"

    def test_environment_wins(self, monkeypatch):
        monkeypatch.setenv("CASEDESK_RATE_LIMIT_AUTH", "50/minute")
        overrides = yaml_overrides({"rate_limits": {"auth": "5/15minutes"}})
        assert "rate_limit_auth" not in overrides

        settings = APISettings(**overrides)
        assert settings.rate_limit_auth == "50/minute"

    def test_database_url_omitted_when_unset(self, monkeypatch):
        monkeypatch.delenv("CASEDESK_DATABASE_URL", raising=False)
        assert "database_url" not in yaml_overrides({"application": {"environment": "production"}})

    def test_default_template_mentions_every_section(self):
        for section in ("database:", "application:", "security:", "rate_limits:"):
            assert section in DEFAULT_CONFIG


class TestSettings:
    """Test APISettings helpers."""

    def test_is_production(self):
        assert APISettings(environment="production").is_production is True
        assert APISettings(environment="test").is_production is False
