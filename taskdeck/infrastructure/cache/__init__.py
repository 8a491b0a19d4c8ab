"""Cache: Redis cache-aside service and cache key utilities.

Used by services for read-heavy lookups (membership roles). Key format
lives in keys.py.
"""

from taskdeck.infrastructure.cache.cache_protocol import CacheProtocol
from taskdeck.infrastructure.cache.keys import (
    is_valid_key_component,
    role_key,
    stats_key,
    workspace_roles_pattern,
    workspaces_key,
)
from taskdeck.infrastructure.cache.redis_cache import CacheEntry, CacheService

__all__ = [
    "CacheEntry",
    "CacheProtocol",
    "CacheService",
    "is_valid_key_component",
    "role_key",
    "stats_key",
    "workspace_roles_pattern",
    "workspaces_key",
]
