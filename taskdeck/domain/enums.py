"""Domain enumerations for workspace membership and authorization.

Role and Action are closed sets; the capability table in
taskdeck.application.services.authorization_service must cover every Action.
"""

from enum import Enum


class Role(str, Enum):
    """Membership level of a user inside a workspace."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"


class Action(str, Enum):
    """Guarded workspace operations (resource:verb)."""

    WORKSPACE_DELETE = "workspace:delete"
    WORKSPACE_UPDATE = "workspace:update"
    MEMBERS_INVITE = "members:invite"
    MEMBERS_REMOVE = "members:remove"
    MEMBERS_CHANGE_ROLE = "members:change_role"
    OWNERSHIP_TRANSFER = "ownership:transfer"
    PROJECT_CREATE = "project:create"
    PROJECT_EDIT_ANY = "project:edit_any"
    PROJECT_DELETE_ANY = "project:delete_any"
    TODO_CREATE = "todo:create"
    TODO_EDIT_ANY = "todo:edit_any"
    TODO_DELETE_ANY = "todo:delete_any"
    TODO_ASSIGN = "todo:assign"
    TODO_VIEW_ALL = "todo:view_all"
    TIMESHEET_VIEW_ALL = "timesheet:view_all"
    TIMESHEET_EDIT_ANY = "timesheet:edit_any"
    TIMESHEET_DELETE_ANY = "timesheet:delete_any"
    COMMENT_DELETE_ANY = "comment:delete_any"
