"""Repositories over the SQL membership store."""

from taskdeck.infrastructure.persistence.repositories.membership_repo import (
    MembershipRepository,
)

__all__ = ["MembershipRepository"]
