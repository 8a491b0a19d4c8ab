"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from taskdeck.domain.enums import Action, Role
from taskdeck.domain.exceptions import (
    AuthorizationException,
    DatabaseNotConfiguredException,
    MembershipRuleException,
    ResourceNotFoundException,
    TaskdeckException,
)

__all__ = [
    # Enums
    "Action",
    "Role",
    # Exceptions
    "AuthorizationException",
    "DatabaseNotConfiguredException",
    "MembershipRuleException",
    "ResourceNotFoundException",
    "TaskdeckException",
]
