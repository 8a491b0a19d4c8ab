"""Settings validation and logging setup."""

import logging

import pytest
from pydantic import ValidationError

from taskdeck.core.config import Settings, get_settings
from taskdeck.shared.telemetry.logging import setup_logging


def test_defaults() -> None:
    settings = Settings()
    assert settings.cache_ttl_roles == 60
    assert settings.cache_scan_page_size == 100
    assert settings.rate_limit_enabled is True


def test_env_overrides_are_read(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CACHE_TTL_ROLES", "15")
    monkeypatch.setenv("REDIS_PASSWORD", "s3cret")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.cache_ttl_roles == 15
    assert settings.redis_password.get_secret_value() == "s3cret"
    assert "s3cret" not in repr(settings)


@pytest.mark.parametrize(
    "overrides",
    [
        {"cache_ttl_roles": 0},
        {"cache_scan_page_size": -1},
        {"redis_socket_timeout": 0},
        {"log_level": "LOUD"},
    ],
)
def test_invalid_values_are_rejected(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        Settings(**overrides)


@pytest.mark.parametrize(
    ("enabled", "host", "configured"),
    [(True, "localhost", True), (True, "  ", False), (False, "localhost", False)],
)
def test_redis_configured(enabled: bool, host: str, configured: bool) -> None:
    assert Settings(redis_enabled=enabled, redis_host=host).redis_configured is configured


def test_setup_logging_follows_database_echo() -> None:
    setup_logging(Settings(database_echo=True))
    assert logging.getLogger("sqlalchemy.engine").level == logging.INFO

    setup_logging(Settings(database_echo=False))
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    assert logging.getLogger("redis").level == logging.WARNING
