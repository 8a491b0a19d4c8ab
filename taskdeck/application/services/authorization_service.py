"""Authorization service: static role capability table plus cached role lookup.

Permissions are declared in source (PERMISSIONS) and never change at runtime.
A member's role is read through the cache-aside layer with a short TTL, so a
role change is only seen once the cached entry expires or is invalidated via
invalidate_member_role().
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType

from taskdeck.application.interfaces.services import IMembershipStore
from taskdeck.domain.enums import Action, Role
from taskdeck.domain.exceptions import AuthorizationException
from taskdeck.infrastructure.cache.cache_protocol import CacheProtocol
from taskdeck.infrastructure.cache.keys import (
    is_valid_key_component,
    role_key,
    workspace_roles_pattern,
)

logger = logging.getLogger(__name__)

_ALL = frozenset(Role)
_MANAGERS = frozenset({Role.OWNER, Role.ADMIN})
_OWNER = frozenset({Role.OWNER})

PERMISSIONS: MappingProxyType[Action, frozenset[Role]] = MappingProxyType(
    {
        Action.WORKSPACE_DELETE: _OWNER,
        Action.WORKSPACE_UPDATE: _MANAGERS,
        Action.MEMBERS_INVITE: _MANAGERS,
        Action.MEMBERS_REMOVE: _MANAGERS,
        Action.MEMBERS_CHANGE_ROLE: _MANAGERS,
        Action.OWNERSHIP_TRANSFER: _OWNER,
        Action.PROJECT_CREATE: _ALL,
        Action.PROJECT_EDIT_ANY: _MANAGERS,
        Action.PROJECT_DELETE_ANY: _MANAGERS,
        Action.TODO_CREATE: _ALL,
        Action.TODO_EDIT_ANY: _MANAGERS,
        Action.TODO_DELETE_ANY: _MANAGERS,
        Action.TODO_ASSIGN: _ALL,
        Action.TODO_VIEW_ALL: _ALL,
        Action.TIMESHEET_VIEW_ALL: _MANAGERS,
        Action.TIMESHEET_EDIT_ANY: _MANAGERS,
        Action.TIMESHEET_DELETE_ANY: _MANAGERS,
        Action.COMMENT_DELETE_ANY: _MANAGERS,
    }
)

_missing = set(Action) - set(PERMISSIONS)
if _missing:
    raise RuntimeError(
        f"PERMISSIONS is missing actions: {sorted(a.value for a in _missing)}"
    )


def is_allowed(role: Role, action: Action) -> bool:
    """Return True if role may perform action according to PERMISSIONS."""
    return role in PERMISSIONS[action]


@dataclass(frozen=True)
class PermissionCheck:
    """Result of check_permission. role is None when the user is not a member."""

    allowed: bool
    role: Role | None


class AuthorizationService:
    """Workspace permission checks; role lookups go through the cache (60s TTL typical)."""

    def __init__(
        self,
        membership_store: IMembershipStore,
        cache: CacheProtocol,
        role_ttl: int = 60,
    ) -> None:
        self.membership_store = membership_store
        self.cache = cache
        self.role_ttl = role_ttl

    async def get_member_role(self, user_id: str, workspace_id: str) -> Role | None:
        """Return the user's role in the workspace, or None if not a member.

        Ids that cannot form a cache key (empty, or containing the key
        separator) never belong to a member and resolve to None uncached.
        """
        if not (is_valid_key_component(user_id) and is_valid_key_component(workspace_id)):
            logger.debug(
                "Role lookup for malformed ids: user=%r workspace=%r", user_id, workspace_id
            )
            return None

        async def fetch() -> str | None:
            role = await self.membership_store.find_role(user_id, workspace_id)
            return role.value if role is not None else None

        value = await self.cache.cached(role_key(user_id, workspace_id), self.role_ttl, fetch)
        return Role(value) if value is not None else None

    async def check_permission(
        self, user_id: str, workspace_id: str, action: Action
    ) -> PermissionCheck:
        """Resolve the user's role and test it against the action's allowed roles."""
        role = await self.get_member_role(user_id, workspace_id)
        if role is None:
            return PermissionCheck(allowed=False, role=None)
        return PermissionCheck(allowed=is_allowed(role, action), role=role)

    async def require_permission(
        self, user_id: str, workspace_id: str, action: Action
    ) -> Role:
        """Return the user's role, or raise AuthorizationException if the action is denied."""
        check = await self.check_permission(user_id, workspace_id, action)
        if not check.allowed or check.role is None:
            logger.info(
                "Permission denied: user=%s workspace=%s action=%s role=%s",
                user_id,
                workspace_id,
                action.value,
                check.role.value if check.role else None,
            )
            raise AuthorizationException(
                action.value, check.role.value if check.role else None
            )
        return check.role

    async def invalidate_member_role(self, user_id: str, workspace_id: str) -> None:
        """Drop the cached role for one member. Call after any role change."""
        await self.cache.invalidate(role_key(user_id, workspace_id))

    async def invalidate_workspace_roles(self, workspace_id: str) -> int:
        """Drop every cached role in a workspace (e.g. after deleting it)."""
        return await self.cache.invalidate_pattern(workspace_roles_pattern(workspace_id))
