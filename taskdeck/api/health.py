"""Health check endpoint. Used for liveness probes; reports cache availability."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from taskdeck.api.dependencies import get_cache
from taskdeck.infrastructure.cache.redis_cache import CacheService

router = APIRouter()


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    cache: Literal["available", "unavailable"] = Field(
        ..., description="Whether the Redis cache is in use"
    )


@router.get("", response_model=HealthResponse)
def health_check(cache: Annotated[CacheService, Depends(get_cache)]) -> HealthResponse:
    """Return ok; the service works with or without the cache."""
    return HealthResponse(cache="available" if cache.is_available() else "unavailable")
