"""Domain exceptions for Taskdeck.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. The HTTP layer
maps them to responses in taskdeck.core.exception_handlers.
"""

from typing import Any


class TaskdeckException(Exception):
    """Base exception for all Taskdeck application errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. action, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class AuthorizationException(TaskdeckException):
    """Raised when a workspace member's role does not permit the action."""

    def __init__(self, action: str, role: str | None = None) -> None:
        """Initialize with the denied action and the caller's role, if any.

        Args:
            action: Action name (e.g. 'workspace:delete').
            role: Resolved role, or None when the caller is not a member.
        """
        details: dict[str, Any] = {"action": action}
        if role is not None:
            details["role"] = role
        super().__init__(f"Permission denied: {action}", "PERMISSION_DENIED", details)
        self.action = action
        self.role = role


class ResourceNotFoundException(TaskdeckException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class MembershipRuleException(TaskdeckException):
    """Raised when a membership change breaks a workspace invariant (e.g. removing the owner)."""

    def __init__(self, message: str, workspace_id: str, user_id: str) -> None:
        super().__init__(
            message,
            "MEMBERSHIP_RULE_VIOLATION",
            {"workspace_id": workspace_id, "user_id": user_id},
        )


class DatabaseNotConfiguredException(TaskdeckException):
    """Raised when the membership store is used without DATABASE_URL."""

    def __init__(self) -> None:
        super().__init__(
            "Membership database is not configured",
            "DATABASE_NOT_CONFIGURED",
        )
