"""Tests for domain exceptions (error_code, message, details)."""

from taskdeck.domain.exceptions import (
    AuthorizationException,
    DatabaseNotConfiguredException,
    MembershipRuleException,
    ResourceNotFoundException,
    TaskdeckException,
)


def test_taskdeck_exception_default_error_code() -> None:
    """Base TaskdeckException uses class name as error_code when not provided."""
    exc = TaskdeckException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "TaskdeckException"
    assert exc.details == {}


def test_taskdeck_exception_custom_error_code_and_details() -> None:
    exc = TaskdeckException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_authorization_exception_carries_action_and_role() -> None:
    exc = AuthorizationException("workspace:delete", role="admin")
    assert str(exc) == "Permission denied: workspace:delete"
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.action == "workspace:delete"
    assert exc.details == {"action": "workspace:delete", "role": "admin"}


def test_authorization_exception_for_non_member_omits_role() -> None:
    exc = AuthorizationException("todo:create")
    assert exc.role is None
    assert exc.details == {"action": "todo:create"}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("workspace_member", "u1")
    assert exc.message == "workspace_member not found: u1"
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "workspace_member", "resource_id": "u1"}


def test_membership_rule_exception() -> None:
    exc = MembershipRuleException("Cannot remove the workspace owner", "w1", "u1")
    assert exc.error_code == "MEMBERSHIP_RULE_VIOLATION"
    assert exc.details == {"workspace_id": "w1", "user_id": "u1"}


def test_database_not_configured_exception() -> None:
    exc = DatabaseNotConfiguredException()
    assert exc.error_code == "DATABASE_NOT_CONFIGURED"
    assert isinstance(exc, TaskdeckException)
