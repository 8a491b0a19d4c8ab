"""Application layer: interfaces and services.

Depends on domain types and protocol definitions (DIP). Infrastructure
implements the interfaces (membership repository, cache).
"""

from taskdeck.application.interfaces import IMembershipRepository, IMembershipStore
from taskdeck.application.services import (
    PERMISSIONS,
    AuthorizationService,
    MembershipService,
    PermissionCheck,
    is_allowed,
)

__all__ = [
    "PERMISSIONS",
    "AuthorizationService",
    "IMembershipRepository",
    "IMembershipStore",
    "MembershipService",
    "PermissionCheck",
    "is_allowed",
]
