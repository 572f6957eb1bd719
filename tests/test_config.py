import pytest

from app.core.config import (
    DEV_FALLBACK_SECRET,
    DevelopmentSettings,
    ProductionSettings,
    load_settings,
)
from app.core.errors import ConfigurationError

PRODUCTION_ENV = {
    "APP_ENV": "production",
    "JWT_SECRET": "x" * 40,
    "STORE_BUCKET_SLUG": "budget",
    "STORE_READ_KEY": "read",
    "STORE_WRITE_KEY": "write",
}


def test_development_uses_fallback_secret() -> None:
    settings = load_settings({"APP_ENV": "development"})

    assert isinstance(settings, DevelopmentSettings)
    assert settings.jwt_secret == DEV_FALLBACK_SECRET
    assert settings.cookie_secure is False


def test_missing_app_env_means_production() -> None:
    with pytest.raises(ConfigurationError):
        load_settings({})


def test_production_without_secret_is_fatal() -> None:
    env = {k: v for k, v in PRODUCTION_ENV.items() if k != "JWT_SECRET"}
    with pytest.raises(ConfigurationError) as excinfo:
        load_settings(env)
    assert "jwt_secret" in str(excinfo.value)


def test_production_rejects_short_secret() -> None:
    with pytest.raises(ConfigurationError):
        load_settings({**PRODUCTION_ENV, "JWT_SECRET": "short"})


def test_production_settings_from_env() -> None:
    settings = load_settings({
        **PRODUCTION_ENV,
        "ACCESS_TOKEN_EXPIRE_MINUTES": "30",
        "CORS_ORIGINS": "https://a.example, https://b.example",
    })

    assert isinstance(settings, ProductionSettings)
    assert settings.cookie_secure is True
    assert settings.access_token_ttl_seconds == 1800
    assert settings.cors_origins == ["https://a.example", "https://b.example"]


def test_unknown_environment_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        load_settings({"APP_ENV": "staging"})


def test_invalid_bcrypt_rounds_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        load_settings({"APP_ENV": "development", "BCRYPT_ROUNDS": "2"})
