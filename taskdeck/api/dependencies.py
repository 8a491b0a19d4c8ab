"""FastAPI dependencies (composition root).

Builds request-scoped services from the process-wide components created in
taskdeck.core.lifespan (rate limiter, cache service) and a DB session.
Authentication is handled upstream: it must put the caller's id on
request.state.user_id before permission-guarded routes run.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskdeck.application.services.authorization_service import AuthorizationService
from taskdeck.application.services.membership_service import MembershipService
from taskdeck.core.config import get_settings
from taskdeck.core.limiter import RateLimiter, ThrottlePolicy
from taskdeck.domain.enums import Action, Role
from taskdeck.infrastructure.cache.redis_cache import CacheService
from taskdeck.infrastructure.persistence.database import get_db
from taskdeck.infrastructure.persistence.repositories.membership_repo import (
    MembershipRepository,
)

logger = logging.getLogger(__name__)


def get_rate_limiter(request: Request) -> RateLimiter:
    """Process-wide rate limiter (app.state.rate_limiter)."""
    return request.app.state.rate_limiter


def get_cache(request: Request) -> CacheService:
    """Process-wide cache service (app.state.cache)."""
    return request.app.state.cache


def get_current_user_id(request: Request) -> str:
    """Return the authenticated user id; 401 when authentication did not run."""
    user_id = getattr(request.state, "user_id", None)
    if not user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user_id


def get_authorization_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    cache: Annotated[CacheService, Depends(get_cache)],
) -> AuthorizationService:
    """AuthorizationService backed by the membership table and the role cache."""
    return AuthorizationService(
        membership_store=MembershipRepository(db),
        cache=cache,
        role_ttl=get_settings().cache_ttl_roles,
    )


def get_membership_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    cache: Annotated[CacheService, Depends(get_cache)],
) -> MembershipService:
    """MembershipService for role changes; the service commits each mutation itself."""
    repo = MembershipRepository(db)
    authorization = AuthorizationService(
        membership_store=repo,
        cache=cache,
        role_ttl=get_settings().cache_ttl_roles,
    )
    return MembershipService(membership_repo=repo, authorization=authorization, cache=cache)


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def _hash_key(key: str) -> str:
    """Hash the throttle key for logging without exposing client addresses."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


def throttle(policy: ThrottlePolicy):
    """Dependency factory: count one attempt against policy for the client IP; 429 when over."""

    async def _throttle(
        request: Request,
        limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
    ) -> None:
        settings = get_settings()
        if not settings.rate_limit_enabled:
            return
        key = policy.key(_client_ip(request))
        result = limiter.attempt(key, policy.max_requests, policy.window_ms)
        if result.success:
            return

        retry_after = result.retry_after_seconds(limiter.now_ms())
        logger.warning(
            "Rate limit exceeded: policy=%s key_hash=%s retry_after_s=%s",
            policy.prefix,
            _hash_key(key),
            retry_after,
        )
        headers: dict[str, str] = {}
        if settings.rate_limit_include_headers:
            headers["Retry-After"] = str(retry_after)
            headers["X-RateLimit-Limit"] = str(policy.max_requests)
            headers["X-RateLimit-Remaining"] = str(result.remaining)
            headers["X-RateLimit-Reset"] = str(result.reset_at // 1000)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many attempts; try again later",
            headers=headers or None,
        )

    return _throttle


def require_permission(action: Action):
    """Dependency factory: the caller must hold a role allowed to perform action.

    The route must declare a workspace_id path parameter. Returns the caller's role.
    """

    async def _require(
        workspace_id: str,
        user_id: Annotated[str, Depends(get_current_user_id)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> Role:
        return await auth_svc.require_permission(user_id, workspace_id, action)

    return _require
