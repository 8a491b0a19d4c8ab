"""Cache key builders. Single place for key format.

Key components (user_id, workspace_id) must not contain CACHE_KEY_SEP to
avoid ambiguous or colliding keys.
"""

from taskdeck.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_ROLE,
    CACHE_PREFIX_STATS,
    CACHE_PREFIX_WORKSPACES,
)

# Redis MATCH metacharacters; escaped with a backslash inside patterns.
_GLOB_SPECIAL = frozenset("*?[]\\")


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def is_valid_key_component(value: str) -> bool:
    """True when value can be used as a key component."""
    return bool(value) and CACHE_KEY_SEP not in value


def _escape_glob(value: str) -> str:
    return "".join(f"\\{c}" if c in _GLOB_SPECIAL else c for c in value)


def role_key(user_id: str, workspace_id: str) -> str:
    """Cache key for a user's membership role in a workspace."""
    _validate_key_component(user_id, "user_id")
    _validate_key_component(workspace_id, "workspace_id")
    return f"{CACHE_PREFIX_ROLE}{CACHE_KEY_SEP}{user_id}{CACHE_KEY_SEP}{workspace_id}"


def workspace_roles_pattern(workspace_id: str) -> str:
    """SCAN pattern matching every cached role in a workspace.

    Glob characters in workspace_id are escaped so the pattern only matches
    that workspace.
    """
    _validate_key_component(workspace_id, "workspace_id")
    return f"{CACHE_PREFIX_ROLE}{CACHE_KEY_SEP}*{CACHE_KEY_SEP}{_escape_glob(workspace_id)}"


def workspaces_key(user_id: str) -> str:
    """Cache key for the list of workspaces a user belongs to."""
    _validate_key_component(user_id, "user_id")
    return f"{CACHE_PREFIX_WORKSPACES}{CACHE_KEY_SEP}{user_id}"


def stats_key(workspace_id: str) -> str:
    """Cache key for dashboard stats of a workspace."""
    _validate_key_component(workspace_id, "workspace_id")
    return f"{CACHE_PREFIX_STATS}{CACHE_KEY_SEP}{workspace_id}"
