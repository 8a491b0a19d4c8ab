"""Membership service: role changes, removal, ownership transfer, leaving.

Every operation that alters a membership commits first and only then drops
the affected cached roles (and the member-facing workspace lists and stats).
A read racing the mutation can only re-cache the already committed role, so
authorization checks see the change immediately instead of after the TTL.
"""

from __future__ import annotations

import logging

from taskdeck.application.interfaces.services import IMembershipRepository
from taskdeck.application.services.authorization_service import AuthorizationService
from taskdeck.domain.enums import Action, Role
from taskdeck.domain.exceptions import MembershipRuleException, ResourceNotFoundException
from taskdeck.infrastructure.cache.cache_protocol import CacheProtocol
from taskdeck.infrastructure.cache.keys import role_key, stats_key, workspaces_key

logger = logging.getLogger(__name__)


class MembershipService:
    """Guards and applies membership mutations, then invalidates cached roles."""

    def __init__(
        self,
        membership_repo: IMembershipRepository,
        authorization: AuthorizationService,
        cache: CacheProtocol,
    ) -> None:
        self.membership_repo = membership_repo
        self.authorization = authorization
        self.cache = cache

    async def _current_role(self, user_id: str, workspace_id: str) -> Role | None:
        # Read from the store, not the cache: guards must not act on a stale role.
        return await self.membership_repo.find_role(user_id, workspace_id)

    async def change_role(
        self, actor_id: str, workspace_id: str, target_user_id: str, new_role: Role
    ) -> None:
        """Set a member's role to admin or member.

        Raises:
            AuthorizationException: Actor lacks members:change_role.
            MembershipRuleException: Target is the owner, or new_role is owner.
            ResourceNotFoundException: Target is not a member.
        """
        await self.authorization.require_permission(
            actor_id, workspace_id, Action.MEMBERS_CHANGE_ROLE
        )
        target_role = await self._current_role(target_user_id, workspace_id)
        if target_role is None:
            raise ResourceNotFoundException("workspace_member", target_user_id)
        if target_role is Role.OWNER:
            raise MembershipRuleException(
                "Cannot change the owner's role", workspace_id, target_user_id
            )
        if new_role is Role.OWNER:
            raise MembershipRuleException(
                "Use transfer_ownership to change owner", workspace_id, target_user_id
            )

        await self.membership_repo.set_role(target_user_id, workspace_id, new_role)
        await self.membership_repo.commit()
        await self.authorization.invalidate_member_role(target_user_id, workspace_id)
        logger.info(
            "Member role changed: workspace=%s user=%s role=%s by=%s",
            workspace_id,
            target_user_id,
            new_role.value,
            actor_id,
        )

    async def remove_member(
        self, actor_id: str, workspace_id: str, target_user_id: str
    ) -> None:
        """Remove a non-owner member from the workspace."""
        await self.authorization.require_permission(
            actor_id, workspace_id, Action.MEMBERS_REMOVE
        )
        target_role = await self._current_role(target_user_id, workspace_id)
        if target_role is Role.OWNER:
            raise MembershipRuleException(
                "Cannot remove the workspace owner", workspace_id, target_user_id
            )
        if not await self.membership_repo.remove(target_user_id, workspace_id):
            raise ResourceNotFoundException("workspace_member", target_user_id)

        await self.membership_repo.commit()
        await self.cache.invalidate_many(
            role_key(target_user_id, workspace_id),
            workspaces_key(target_user_id),
            stats_key(workspace_id),
        )
        logger.info(
            "Member removed: workspace=%s user=%s by=%s",
            workspace_id,
            target_user_id,
            actor_id,
        )

    async def transfer_ownership(
        self, current_owner_id: str, workspace_id: str, new_owner_id: str
    ) -> None:
        """Make new_owner_id the owner; the previous owner becomes admin."""
        await self.authorization.require_permission(
            current_owner_id, workspace_id, Action.OWNERSHIP_TRANSFER
        )
        if await self._current_role(new_owner_id, workspace_id) is None:
            raise ResourceNotFoundException("workspace_member", new_owner_id)

        await self.membership_repo.set_role(current_owner_id, workspace_id, Role.ADMIN)
        await self.membership_repo.set_role(new_owner_id, workspace_id, Role.OWNER)
        await self.membership_repo.commit()

        await self.cache.invalidate_many(
            role_key(current_owner_id, workspace_id),
            role_key(new_owner_id, workspace_id),
            workspaces_key(current_owner_id),
            workspaces_key(new_owner_id),
            stats_key(workspace_id),
        )
        logger.info(
            "Ownership transferred: workspace=%s from=%s to=%s",
            workspace_id,
            current_owner_id,
            new_owner_id,
        )

    async def leave_workspace(self, user_id: str, workspace_id: str) -> None:
        """Remove the caller's own membership. The owner must transfer first."""
        role = await self._current_role(user_id, workspace_id)
        if role is None:
            raise ResourceNotFoundException("workspace_member", user_id)
        if role is Role.OWNER:
            raise MembershipRuleException(
                "Owner cannot leave. Transfer ownership first.", workspace_id, user_id
            )
        await self.membership_repo.remove(user_id, workspace_id)
        await self.membership_repo.commit()
        await self.cache.invalidate_many(
            role_key(user_id, workspace_id),
            workspaces_key(user_id),
            stats_key(workspace_id),
        )
