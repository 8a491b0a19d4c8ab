"""Redis-backed cache-aside service.

Values are stored as a JSON envelope {"__cached": true, "value": ...} so a
cached None/falsy value is distinguishable from a miss. The cache is an
optimization only: a missing, unreachable or misbehaving backend degrades to
calling the fetch function, and backend errors are logged, never raised.
Backend calls are not retried; the client's socket timeout bounds each one.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

import redis.asyncio as redis

from taskdeck.core.config import Settings, get_settings
from taskdeck.core.constants import CACHE_ENVELOPE_TAG, CACHE_ENVELOPE_VALUE

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry:
    """A decoded cache hit. value may legitimately be None."""

    value: Any


def _encode_entry(value: Any) -> str:
    return json.dumps({CACHE_ENVELOPE_TAG: True, CACHE_ENVELOPE_VALUE: value})


def _decode_entry(raw: Any) -> CacheEntry | None:
    """Return the envelope's value, or None when raw is not a well-formed envelope."""
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if not isinstance(payload, dict):
        return None
    if payload.get(CACHE_ENVELOPE_TAG) is not True or CACHE_ENVELOPE_VALUE not in payload:
        return None
    return CacheEntry(payload[CACHE_ENVELOPE_VALUE])


class CacheService:
    """Async Redis cache-aside service with TTL and pattern invalidation.

    Build once at startup (taskdeck.core.lifespan), call connect(), and share
    the instance. Passing redis_client skips connect() and marks the cache
    available immediately (tests, DI).
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional ready-to-use Redis client.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None
        self._page_size = self.settings.cache_scan_page_size

    async def connect(self) -> None:
        """Create the Redis client and ping it. Call on app startup.

        Leaves the cache disabled when Redis is not configured or not reachable.
        """
        if self.redis is not None:
            return
        if not self.settings.redis_configured:
            logger.info("Redis cache not configured; caching disabled")
            return
        password = self.settings.redis_password
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=password.get_secret_value() if password else None,
            decode_responses=True,
            socket_connect_timeout=self.settings.redis_socket_timeout,
            socket_timeout=self.settings.redis_socket_timeout,
            socket_keepalive=True,
        )
        try:
            await client.ping()
        except redis.RedisError as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            await client.aclose()
            return
        self.redis = client
        self._connected = True
        logger.info(
            "Redis cache connected: %s:%s",
            self.settings.redis_host,
            self.settings.redis_port,
        )

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def get(self, key: str) -> CacheEntry | None:
        """Return the cached entry for key, or None on miss.

        Absent keys, malformed envelopes and backend errors are all misses.

        Args:
            key: Cache key (use taskdeck.infrastructure.cache.keys builders).
        """
        if not self.is_available():
            return None
        try:
            raw = await self.redis.get(key)
        except redis.RedisError as e:
            logger.warning("Cache get failed for key %s: %s", key, e)
            return None
        if raw is None:
            logger.debug("Cache MISS: %s", key)
            return None
        entry = _decode_entry(raw)
        if entry is None:
            logger.warning("Cache entry for key %s is malformed; treating as miss", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return entry

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        """Store value under key with TTL. Returns True on success.

        Args:
            key: Cache key.
            value: JSON-serializable value (None allowed).
            ttl: Time-to-live in seconds.
        """
        if not self.is_available():
            return False
        try:
            serialized = _encode_entry(value)
        except (TypeError, ValueError) as e:
            logger.warning("Cache value for key %s is not serializable: %s", key, e)
            return False
        try:
            await self.redis.set(key, serialized, ex=ttl)
        except redis.RedisError as e:
            logger.warning("Cache set failed for key %s: %s", key, e)
            return False
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    async def cached(
        self, key: str, ttl_seconds: int, fetch: Callable[[], Awaitable[T]]
    ) -> T:
        """Cache-aside read: return the cached value or fetch, store, and return it.

        Only exceptions raised by fetch propagate. Values round-trip through
        JSON, so a hit returns JSON types (e.g. str for a str Enum).

        Args:
            key: Cache key.
            ttl_seconds: Time-to-live for the written entry.
            fetch: Coroutine function producing the authoritative value.

        Raises:
            ValueError: If ttl_seconds is not positive.
        """
        if ttl_seconds < 1:
            raise ValueError("ttl_seconds must be >= 1")
        if not self.is_available():
            return await fetch()
        entry = await self.get(key)
        if entry is not None:
            return entry.value
        value = await fetch()
        await self.set(key, value, ttl_seconds)
        return value

    async def invalidate(self, key: str) -> None:
        """Delete one key (best effort)."""
        await self.invalidate_many(key)

    async def invalidate_many(self, *keys: str) -> None:
        """Delete several keys in one call (best effort)."""
        if not keys or not self.is_available():
            return
        try:
            await self.redis.delete(*keys)
        except redis.RedisError as e:
            logger.warning("Cache delete failed for keys %s: %s", keys, e)
            return
        logger.debug("Cache DELETE: %s", keys)

    async def invalidate_pattern(self, pattern: str) -> int:
        """Delete all keys matching a glob pattern using cursor SCAN + UNLINK per page.

        Backends without SCAN (or that reject it) make this a no-op.

        Args:
            pattern: Redis MATCH pattern (e.g. role:*:ws_123).

        Returns:
            Number of keys deleted.
        """
        if not self.is_available():
            return 0
        scan = getattr(self.redis, "scan", None)
        if scan is None:
            logger.debug("Cache backend has no SCAN; skipping invalidation of %s", pattern)
            return 0
        deleted = 0
        cursor: int = 0
        try:
            while True:
                cursor, keys = await scan(cursor=cursor, match=pattern, count=self._page_size)
                if keys:
                    deleted += int(await self.redis.unlink(*keys) or 0)
                if int(cursor) == 0:
                    break
        except redis.RedisError as e:
            logger.warning("Cache invalidate_pattern failed for %s: %s", pattern, e)
            return deleted
        if deleted > 0:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
        return deleted
