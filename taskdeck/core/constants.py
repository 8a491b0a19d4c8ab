"""Core constants: cache key prefixes and cache envelope layout.

Single source of truth for cache key structure. Used by
taskdeck.infrastructure.cache.keys and the cache service.
"""

# Cache key prefixes
CACHE_PREFIX_ROLE = "role"
CACHE_PREFIX_WORKSPACES = "workspaces"
CACHE_PREFIX_STATS = "stats"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Tag field of the cache envelope {"__cached": true, "value": ...}
CACHE_ENVELOPE_TAG = "__cached"
CACHE_ENVELOPE_VALUE = "value"
