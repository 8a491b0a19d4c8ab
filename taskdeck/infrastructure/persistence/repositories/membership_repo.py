"""Membership repository: workspace_member rows (implements IMembershipStore)."""

from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from taskdeck.domain.enums import Role
from taskdeck.infrastructure.persistence.models import WorkspaceMember


class MembershipRepository:
    """Reads and updates the role of a user in a workspace."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_role(self, user_id: str, workspace_id: str) -> Role | None:
        """Return the member's role, or None when the user is not a member."""
        result = await self.db.execute(
            select(WorkspaceMember.role)
            .where(
                WorkspaceMember.user_id == user_id,
                WorkspaceMember.workspace_id == workspace_id,
            )
            .limit(1)
        )
        role = result.scalar_one_or_none()
        return Role(role) if role is not None else None

    async def set_role(self, user_id: str, workspace_id: str, role: Role) -> bool:
        """Update the member's role. Returns False when no row matched."""
        result = await self.db.execute(
            update(WorkspaceMember)
            .where(
                WorkspaceMember.user_id == user_id,
                WorkspaceMember.workspace_id == workspace_id,
            )
            .values(role=role.value)
        )
        return bool(result.rowcount)

    async def remove(self, user_id: str, workspace_id: str) -> bool:
        """Delete the membership row. Returns False when no row matched."""
        result = await self.db.execute(
            delete(WorkspaceMember).where(
                WorkspaceMember.user_id == user_id,
                WorkspaceMember.workspace_id == workspace_id,
            )
        )
        return bool(result.rowcount)

    async def commit(self) -> None:
        """Commit pending membership changes."""
        await self.db.commit()
