"""Pytest configuration and fixtures for taskdeck.

Redis and the membership database are disabled through the environment before
the app is imported; tests that need a cache get a dict-backed Redis double.
"""

import fnmatch
import os
from collections.abc import AsyncIterator, Iterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

os.environ["REDIS_ENABLED"] = "false"
os.environ["DATABASE_URL"] = ""

from taskdeck.core.config import get_settings  # noqa: E402
from taskdeck.core.limiter import RateLimiter  # noqa: E402
from taskdeck.infrastructure.cache.redis_cache import CacheService  # noqa: E402
from taskdeck.main import create_app  # noqa: E402

T0_MS = 1_700_000_000_000


class FakeClock:
    """Controllable millisecond clock for RateLimiter."""

    def __init__(self, start_ms: int = T0_MS) -> None:
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


def _redis_glob(pattern: str) -> str:
    """Translate Redis MATCH backslash escapes into fnmatch bracket escapes."""
    out: list[str] = []
    chars = iter(pattern)
    for c in chars:
        if c == "\\":
            out.append(f"[{next(chars, c)}]")
        else:
            out.append(c)
    return "".join(out)


class DictRedis:
    """In-memory subset of redis.asyncio.Redis (decode_responses=True) used by CacheService.

    SCAN cursors index an append-only key order, so deleting keys between
    pages does not skip any.
    """

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}
        self._order: list[str] = []
        self.closed = False

    async def ping(self) -> bool:
        return True

    async def get(self, name: str) -> str | None:
        return self.store.get(name)

    async def set(self, name: str, value: str, ex: int | None = None) -> bool:
        if name not in self._order:
            self._order.append(name)
        self.store[name] = value
        self.ttls[name] = ex
        return True

    async def delete(self, *names: str) -> int:
        removed = 0
        for name in names:
            if self.store.pop(name, None) is not None:
                self.ttls.pop(name, None)
                removed += 1
        return removed

    async def unlink(self, *names: str) -> int:
        return await self.delete(*names)

    async def scan(
        self, cursor: int = 0, match: str | None = None, count: int | None = None
    ) -> tuple[int, list[str]]:
        count = count or 10
        window = self._order[cursor : cursor + count]
        keys = [
            k for k in window if k in self.store and (match is None or fnmatch.fnmatchcase(k, _redis_glob(match)))
        ]
        next_cursor = cursor + count
        if next_cursor >= len(self._order):
            next_cursor = 0
        return next_cursor, keys

    async def aclose(self) -> None:
        self.closed = True

    def expire(self, name: str) -> None:
        """Simulate TTL expiry of one key."""
        self.store.pop(name, None)
        self.ttls.pop(name, None)


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Re-read settings for every test (tests may change env via monkeypatch)."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_redis() -> DictRedis:
    return DictRedis()


@pytest.fixture
def cache(fake_redis: DictRedis) -> CacheService:
    """CacheService over the dict-backed Redis (available)."""
    return CacheService(redis_client=fake_redis)


@pytest.fixture
def app(fake_redis: DictRedis, clock: FakeClock) -> FastAPI:
    """App with process-wide components set directly (ASGITransport skips lifespan)."""
    application = create_app()
    application.state.rate_limiter = RateLimiter(clock=clock)
    application.state.cache = CacheService(redis_client=fake_redis)
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
