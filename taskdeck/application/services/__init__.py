"""Application services: authorization and membership management."""

from taskdeck.application.services.authorization_service import (
    PERMISSIONS,
    AuthorizationService,
    PermissionCheck,
    is_allowed,
)
from taskdeck.application.services.membership_service import MembershipService

__all__ = [
    "PERMISSIONS",
    "AuthorizationService",
    "MembershipService",
    "PermissionCheck",
    "is_allowed",
]
