"""Action matrices - which actions each role and each scope level allows.

Closed world: an action absent from a table is denied. Tables are keyed by
enum members and checked for completeness at import, so a role or level
without an entry fails loudly instead of behaving as an implicit deny.
"""

from collections.abc import Mapping
from types import MappingProxyType

from scopegate.domain.exceptions import ConfigurationError
from scopegate.domain.value_objects import (
    PermissionAction,
    PermissionLevel,
    ScopeKind,
    WorkspaceRole,
)

A = PermissionAction

_TASK_ALL = frozenset({
    A.CREATE_TASK,
    A.DELETE_TASK,
    A.EDIT_TASK,
    A.VIEW_TASK,
    A.ASSIGN_TASK,
    A.CHANGE_STATUS,
    A.COMMENT_TASK,
})
_TASK_EDIT = frozenset({
    A.CREATE_TASK,
    A.EDIT_TASK,
    A.VIEW_TASK,
    A.CHANGE_STATUS,
    A.COMMENT_TASK,
})
_TASK_COMMENT = frozenset({A.VIEW_TASK, A.COMMENT_TASK})
_TASK_VIEW = frozenset({A.VIEW_TASK})

_FOLDER_ALL = frozenset({A.CREATE_FOLDER, A.DELETE_FOLDER, A.UPDATE_FOLDER, A.VIEW_FOLDER})
_LIST_ALL = frozenset({A.CREATE_LIST, A.DELETE_LIST, A.UPDATE_LIST, A.VIEW_LIST})

_OWNER_ACTIONS = frozenset(PermissionAction)

ROLE_ACTIONS: Mapping[WorkspaceRole, frozenset[PermissionAction]] = MappingProxyType({
    WorkspaceRole.OWNER: _OWNER_ACTIONS,
    WorkspaceRole.ADMIN: _OWNER_ACTIONS - {
        A.DELETE_WORKSPACE,
        A.UPDATE_WORKSPACE,
        A.CHANGE_MEMBER_ROLE,
        A.MANAGE_SETTINGS,
    },
    WorkspaceRole.MEMBER: frozenset({
        A.VIEW_WORKSPACE,
        A.LEAVE_WORKSPACE,
        A.VIEW_SPACE,
        A.VIEW_FOLDER,
        A.VIEW_LIST,
        A.VIEW_ACTIVITY_LOG,
    }) | _TASK_COMMENT,
    WorkspaceRole.GUEST: frozenset({
        A.VIEW_WORKSPACE,
        A.VIEW_SPACE,
        A.VIEW_FOLDER,
        A.VIEW_LIST,
    }) | _TASK_COMMENT,
})


def _level_table(
    full: frozenset[PermissionAction],
    views: frozenset[PermissionAction],
) -> Mapping[PermissionLevel, frozenset[PermissionAction]]:
    """Build one scope's level table from its FULL set and its VIEW_* actions."""
    return MappingProxyType({
        PermissionLevel.FULL: full,
        PermissionLevel.EDIT: views | _TASK_EDIT | {A.VIEW_ACTIVITY_LOG},
        PermissionLevel.COMMENT: views | _TASK_COMMENT,
        PermissionLevel.VIEW: views | _TASK_VIEW,
    })


LEVEL_ACTIONS: Mapping[ScopeKind, Mapping[PermissionLevel, frozenset[PermissionAction]]] = (
    MappingProxyType({
        ScopeKind.SPACE: _level_table(
            full=frozenset({A.UPDATE_SPACE, A.VIEW_SPACE, A.VIEW_ACTIVITY_LOG})
            | _FOLDER_ALL
            | _LIST_ALL
            | _TASK_ALL,
            views=frozenset({A.VIEW_SPACE, A.VIEW_FOLDER, A.VIEW_LIST}),
        ),
        ScopeKind.FOLDER: _level_table(
            full=frozenset({A.UPDATE_FOLDER, A.VIEW_FOLDER, A.VIEW_ACTIVITY_LOG})
            | _LIST_ALL
            | _TASK_ALL,
            views=frozenset({A.VIEW_FOLDER, A.VIEW_LIST}),
        ),
        ScopeKind.LIST: _level_table(
            full=frozenset({A.UPDATE_LIST, A.VIEW_LIST, A.VIEW_ACTIVITY_LOG}) | _TASK_ALL,
            views=frozenset({A.VIEW_LIST}),
        ),
    })
)


def _assert_exhaustive() -> None:
    missing_roles = set(WorkspaceRole) - set(ROLE_ACTIONS)
    if missing_roles:
        raise ConfigurationError(f"Role matrix has no entry for: {sorted(missing_roles)}")
    for scope in ScopeKind:
        table = LEVEL_ACTIONS.get(scope)
        if table is None:
            raise ConfigurationError(f"No level matrix for scope: {scope}")
        missing_levels = set(PermissionLevel) - set(table)
        if missing_levels:
            raise ConfigurationError(
                f"{scope} level matrix has no entry for: {sorted(missing_levels)}"
            )


_assert_exhaustive()


def role_actions(role: WorkspaceRole | str) -> frozenset[PermissionAction]:
    return ROLE_ACTIONS[WorkspaceRole.parse(role)]


def level_actions(scope: ScopeKind | str, level: PermissionLevel | str) -> frozenset[PermissionAction]:
    try:
        table = LEVEL_ACTIONS[ScopeKind(scope)]
    except ValueError as e:
        raise ConfigurationError(f"Unrecognized scope: {scope!r}") from e
    return table[PermissionLevel.parse(level)]


def role_has_action(role: WorkspaceRole | str, action: PermissionAction | str) -> bool:
    """Check if a workspace role allows an action."""
    return PermissionAction.parse(action) in role_actions(role)


def level_has_action(
    scope: ScopeKind | str,
    level: PermissionLevel | str,
    action: PermissionAction | str,
) -> bool:
    """Check if a permission level at the given scope allows an action."""
    return PermissionAction.parse(action) in level_actions(scope, level)
