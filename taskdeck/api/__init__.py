"""HTTP layer: FastAPI router and dependencies."""

from fastapi import APIRouter

from taskdeck.api import health

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])

__all__ = ["api_router"]
