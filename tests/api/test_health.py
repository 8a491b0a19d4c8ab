"""Health endpoint and lifespan wiring tests."""

from fastapi import FastAPI
from httpx import AsyncClient

from taskdeck.core.config import Settings
from taskdeck.core.lifespan import create_lifespan
from taskdeck.core.limiter import RateLimiter
from taskdeck.infrastructure.cache.redis_cache import CacheService


async def test_health_reports_available_cache(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and cache 'available' with a Redis backend."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "cache": "available"}


async def test_health_without_cache_still_ok(app: FastAPI, client: AsyncClient) -> None:
    app.state.cache = CacheService(settings=Settings(redis_enabled=False))

    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["cache"] == "unavailable"


async def test_lifespan_builds_components_without_redis() -> None:
    """With REDIS_ENABLED=false the app starts with a disabled cache."""
    app = FastAPI()
    async with create_lifespan(app):
        assert isinstance(app.state.rate_limiter, RateLimiter)
        assert app.state.cache.is_available() is False
    assert app.state.cache.redis is None
