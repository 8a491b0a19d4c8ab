"""Cache protocol consumed by services (DIP). Real implementation in redis_cache."""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar

T = TypeVar("T")


class CacheProtocol(Protocol):
    """Cache-aside operations. Implementations never raise on backend failure."""

    def is_available(self) -> bool:
        """Return True if a backend is connected and usable."""
        ...

    async def cached(
        self, key: str, ttl_seconds: int, fetch: Callable[[], Awaitable[T]]
    ) -> T:
        """Return the cached value for key, or fetch, store and return it."""
        ...

    async def invalidate(self, key: str) -> None:
        """Remove key from cache (best effort)."""
        ...

    async def invalidate_many(self, *keys: str) -> None:
        """Remove several keys from cache (best effort)."""
        ...

    async def invalidate_pattern(self, pattern: str) -> int:
        """Remove every key matching a glob pattern; return how many were removed."""
        ...
