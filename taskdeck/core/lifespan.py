"""Application lifespan: startup and shutdown.

Components with process-wide state are built once here and kept on
app.state: the rate limiter (attempt map) and the cache service (Redis
client). Request handlers reach them through taskdeck.api.dependencies.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from taskdeck.core.config import get_settings
from taskdeck.core.limiter import RateLimiter
from taskdeck.infrastructure.cache.redis_cache import CacheService
from taskdeck.infrastructure.persistence.database import dispose_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: rate limiter, Redis cache (connect; degrades to disabled).
    Shutdown: cache disconnect, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    app.state.rate_limiter = RateLimiter()

    cache = CacheService(settings=settings)
    await cache.connect()
    app.state.cache = cache
    logger.info(
        "Startup complete (cache %s)",
        "available" if cache.is_available() else "unavailable",
    )

    yield

    # ---- Shutdown ----
    await app.state.cache.disconnect()
    await dispose_engine()
