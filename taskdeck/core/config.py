"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values are validated at load time, not at import time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Every field has a default. Redis and the membership database are optional:
    without Redis the cache-aside layer always goes to the source of truth, and
    without DATABASE_URL the membership store dependency is unavailable.
    """

    # App
    app_name: str = "taskdeck"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str | None = None  # overrides the debug-derived level (e.g. WARNING)

    # Membership store (postgresql+asyncpg://...). Empty = not configured.
    database_url: str = ""
    database_echo: bool = False

    # Redis cache
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_socket_timeout: float = 2.0
    cache_scan_page_size: int = 100

    # Role cache TTL (seconds)
    cache_ttl_roles: int = 60

    # Auth throttling (login/register/forgot-password)
    rate_limit_enabled: bool = True
    rate_limit_include_headers: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_positive_limits(self) -> "Settings":
        """Reject a non-positive role TTL or scan page size."""
        for name in ("cache_scan_page_size", "cache_ttl_roles"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name.upper()} must be >= 1")
        if self.log_level and self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}")
        if self.redis_socket_timeout <= 0:
            raise ValueError("REDIS_SOCKET_TIMEOUT must be > 0")
        return self

    @property
    def redis_configured(self) -> bool:
        """True when Redis is enabled and has a host to connect to."""
        return self.redis_enabled and bool(self.redis_host.strip())


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    In tests, call get_settings.cache_clear() after changing env vars so the
    next get_settings() picks up the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
