"""
Tests for configuration validation
"""
import pytest
from pydantic import ValidationError
from app.core.config import Settings


def _settings(**overrides):
    values = {
        "DATABASE_URL": "postgresql://test",
        "JWT_SECRET_KEY": "a" * 32,
        "APP_ENV": "local",
        "ALLOWED_ORIGINS": "*",
    }
    values.update(overrides)
    return Settings(**values)


def test_prod_settings_rejects_wildcard_origins():
    settings = _settings(APP_ENV="prod", ALLOWED_ORIGINS="*")
    with pytest.raises(ValueError, match="ALLOWED_ORIGINS"):
        settings.validate_production()


def test_prod_settings_rejects_short_jwt_secret():
    settings = _settings(APP_ENV="prod", JWT_SECRET_KEY="short", ALLOWED_ORIGINS="https://example.com")
    with pytest.raises(ValueError, match="JWT_SECRET_KEY"):
        settings.validate_production()


def test_local_settings_allows_wildcard_origins():
    settings = _settings(JWT_SECRET_KEY="test-key")
    settings.validate_production()
    assert settings.get_allowed_origins_list() == ["*"]


def test_allowed_origins_list_is_split_and_trimmed():
    settings = _settings(ALLOWED_ORIGINS="https://a.example.com, https://b.example.com,")
    assert settings.get_allowed_origins_list() == ["https://a.example.com", "https://b.example.com"]


def test_invalid_app_env_rejected():
    with pytest.raises(ValidationError):
        _settings(APP_ENV="production")


def test_log_level_is_upper_cased():
    assert _settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"


def test_payment_and_geofence_defaults():
    settings = _settings()
    assert settings.PAYMENT_DUE_DAY == 15
    assert settings.DEFAULT_RADIUS_METERS == 50
    assert settings.GEO_HIGH_ACCURACY_TIMEOUT_MS == 15000
    assert settings.GEO_LOW_ACCURACY_MAX_AGE_MS == 300000
    assert settings.GEO_HARD_TIMEOUT_MS == 20000
