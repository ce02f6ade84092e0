"""Permission actions - the closed action vocabulary."""

from enum import StrEnum

from scopegate.domain.exceptions import ConfigurationError


class PermissionAction(StrEnum):
    """Named capabilities checked against role and level action sets."""

    # Workspace
    DELETE_WORKSPACE = "DELETE_WORKSPACE"
    UPDATE_WORKSPACE = "UPDATE_WORKSPACE"
    INVITE_MEMBER = "INVITE_MEMBER"
    REMOVE_MEMBER = "REMOVE_MEMBER"
    CHANGE_MEMBER_ROLE = "CHANGE_MEMBER_ROLE"
    VIEW_WORKSPACE = "VIEW_WORKSPACE"
    LEAVE_WORKSPACE = "LEAVE_WORKSPACE"

    # Space
    CREATE_SPACE = "CREATE_SPACE"
    DELETE_SPACE = "DELETE_SPACE"
    UPDATE_SPACE = "UPDATE_SPACE"
    VIEW_SPACE = "VIEW_SPACE"
    ADD_SPACE_MEMBER = "ADD_SPACE_MEMBER"
    REMOVE_SPACE_MEMBER = "REMOVE_SPACE_MEMBER"
    MANAGE_SPACE_PERMISSIONS = "MANAGE_SPACE_PERMISSIONS"

    # Folder
    CREATE_FOLDER = "CREATE_FOLDER"
    DELETE_FOLDER = "DELETE_FOLDER"
    UPDATE_FOLDER = "UPDATE_FOLDER"
    VIEW_FOLDER = "VIEW_FOLDER"

    # List
    CREATE_LIST = "CREATE_LIST"
    DELETE_LIST = "DELETE_LIST"
    UPDATE_LIST = "UPDATE_LIST"
    VIEW_LIST = "VIEW_LIST"

    # Task
    CREATE_TASK = "CREATE_TASK"
    DELETE_TASK = "DELETE_TASK"
    EDIT_TASK = "EDIT_TASK"
    VIEW_TASK = "VIEW_TASK"
    ASSIGN_TASK = "ASSIGN_TASK"
    CHANGE_STATUS = "CHANGE_STATUS"
    COMMENT_TASK = "COMMENT_TASK"

    # Settings and analytics
    MANAGE_SETTINGS = "MANAGE_SETTINGS"
    VIEW_ANALYTICS = "VIEW_ANALYTICS"
    VIEW_ACTIVITY_LOG = "VIEW_ACTIVITY_LOG"

    @property
    def is_workspace_scoped(self) -> bool:
        """Targets the workspace itself; resolved by role only."""
        return self in WORKSPACE_SCOPED_ACTIONS

    @classmethod
    def parse(cls, value: "PermissionAction | str") -> "PermissionAction":
        """Coerce an action name. Unknown names raise ConfigurationError."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise ConfigurationError(f"Unrecognized permission action: {value!r}")


WORKSPACE_SCOPED_ACTIONS: frozenset[PermissionAction] = frozenset({
    PermissionAction.DELETE_WORKSPACE,
    PermissionAction.UPDATE_WORKSPACE,
    PermissionAction.INVITE_MEMBER,
    PermissionAction.REMOVE_MEMBER,
    PermissionAction.CHANGE_MEMBER_ROLE,
    PermissionAction.VIEW_WORKSPACE,
    PermissionAction.LEAVE_WORKSPACE,
    PermissionAction.CREATE_SPACE,
    PermissionAction.MANAGE_SETTINGS,
    PermissionAction.VIEW_ANALYTICS,
})
