"""In-memory sliding-window rate limiter for auth-sensitive endpoints.

Each key keeps the millisecond timestamps of its accepted attempts. Only
attempts inside the trailing window count; rejected attempts are never
recorded. Expired timestamps are pruned lazily when the key is next used.

The limiter is per-process. With N worker processes each one enforces its own
budget, so the effective limit is N times the configured one.
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

from taskdeck.core.constants import CACHE_KEY_SEP

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a single attempt.

    Attributes:
        success: Whether the attempt is within the limit.
        remaining: Attempts left in the current window (0 when throttled).
        reset_at: Epoch milliseconds when the oldest counted attempt leaves the window.
    """

    success: bool
    remaining: int
    reset_at: int

    def retry_after_seconds(self, now_ms: int) -> int:
        """Whole seconds until reset_at (never negative)."""
        return max(0, math.ceil((self.reset_at - now_ms) / 1000))


@dataclass(frozen=True)
class ThrottlePolicy:
    """Named limit applied to keys of the form '<prefix>:<identifier>'."""

    prefix: str
    max_requests: int
    window_ms: int

    def key(self, identifier: str) -> str:
        return f"{self.prefix}{CACHE_KEY_SEP}{identifier}"


LOGIN = ThrottlePolicy("login", max_requests=10, window_ms=15 * MINUTE_MS)
REGISTER = ThrottlePolicy("register", max_requests=5, window_ms=HOUR_MS)
FORGOT_PASSWORD = ThrottlePolicy("forgot", max_requests=3, window_ms=15 * MINUTE_MS)


class RateLimiter:
    """Sliding-window attempt counter keyed by arbitrary strings.

    Construct one per process (see taskdeck.core.lifespan) and share it; tests
    build their own with a controlled clock.
    """

    def __init__(self, clock: Callable[[], int] = _now_ms) -> None:
        self._clock = clock
        self._attempts: dict[str, list[int]] = {}
        self._lock = Lock()

    def attempt(self, key: str, max_requests: int, window_ms: int) -> RateLimitResult:
        """Record an attempt for key if it fits in the window.

        Args:
            key: Throttle key (e.g. 'login:1.2.3.4').
            max_requests: Maximum accepted attempts per window.
            window_ms: Window length in milliseconds.

        Returns:
            RateLimitResult; success=False means the attempt was not recorded.

        Raises:
            ValueError: If max_requests or window_ms is not positive.
        """
        if max_requests < 1:
            raise ValueError("max_requests must be >= 1")
        if window_ms < 1:
            raise ValueError("window_ms must be >= 1")

        with self._lock:
            # Clock is read under the lock so stored timestamps stay non-decreasing.
            now = self._clock()
            window_start = now - window_ms
            recent = [t for t in self._attempts.get(key, ()) if t > window_start]

            if len(recent) >= max_requests:
                self._attempts[key] = recent
                return RateLimitResult(
                    success=False,
                    remaining=0,
                    reset_at=recent[0] + window_ms,
                )

            recent.append(now)
            self._attempts[key] = recent
            return RateLimitResult(
                success=True,
                remaining=max_requests - len(recent),
                reset_at=recent[0] + window_ms,
            )

    def hit(self, policy: ThrottlePolicy, identifier: str) -> RateLimitResult:
        """Apply a named policy to identifier (e.g. client IP)."""
        return self.attempt(policy.key(identifier), policy.max_requests, policy.window_ms)

    def now_ms(self) -> int:
        """Current time according to the limiter's clock."""
        return self._clock()

    def reset_all(self) -> None:
        """Forget every key. Intended for test harnesses."""
        with self._lock:
            self._attempts.clear()
