"""Service interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations fulfill (DIP).
"""

from __future__ import annotations

from typing import Protocol

from taskdeck.domain.enums import Role


class IMembershipStore(Protocol):
    """Read side of the membership store, consumed by AuthorizationService."""

    async def find_role(self, user_id: str, workspace_id: str) -> Role | None:
        """Return the user's role in the workspace, or None if not a member."""


class IMembershipRepository(IMembershipStore, Protocol):
    """Membership store with write operations, consumed by MembershipService."""

    async def set_role(self, user_id: str, workspace_id: str, role: Role) -> bool:
        """Change a member's role; False when the membership does not exist."""

    async def remove(self, user_id: str, workspace_id: str) -> bool:
        """Delete a membership; False when it does not exist."""

    async def commit(self) -> None:
        """Make pending changes visible to other sessions."""
