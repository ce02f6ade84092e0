"""Domain value objects."""

from scopegate.domain.value_objects.permission_action import (
    WORKSPACE_SCOPED_ACTIONS,
    PermissionAction,
)
from scopegate.domain.value_objects.permission_level import PermissionLevel
from scopegate.domain.value_objects.resource_path import ResourcePath, ResourceRef
from scopegate.domain.value_objects.scope_kind import ResourceKind, ScopeKind
from scopegate.domain.value_objects.verdict import Verdict
from scopegate.domain.value_objects.workspace_role import (
    WorkspaceRole,
    role_has_min_level,
)

__all__ = [
    "WORKSPACE_SCOPED_ACTIONS",
    "PermissionAction",
    "PermissionLevel",
    "ResourceKind",
    "ResourcePath",
    "ResourceRef",
    "ScopeKind",
    "Verdict",
    "WorkspaceRole",
    "role_has_min_level",
]
