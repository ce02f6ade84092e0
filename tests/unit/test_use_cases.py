"""Unit tests for use cases."""

from uuid import uuid4

import pytest

from scopegate.application.use_cases.authorization.authorize_action import (
    AuthorizeActionUseCase,
)
from scopegate.application.use_cases.override.grant_override import GrantOverrideUseCase
from scopegate.application.use_cases.override.list_overrides import ListOverridesUseCase
from scopegate.application.use_cases.override.purge_member_overrides import (
    PurgeMemberOverridesUseCase,
)
from scopegate.application.use_cases.override.revoke_override import RevokeOverrideUseCase
from scopegate.domain.exceptions import NotFound, PermissionDenied, ValidationError
from scopegate.domain.value_objects import (
    PermissionAction,
    PermissionLevel,
    ResourceKind,
    ResourceRef,
    ScopeKind,
    Verdict,
    WorkspaceRole,
)
from scopegate.infrastructure.permission.permission_checker import ScopeGatePermissionChecker

from tests.conftest import FakeUnitOfWork, Tree


# --- AuthorizeActionUseCase ---


@pytest.mark.asyncio
async def test_authorize_allows(mock_permission_checker, tree: Tree) -> None:
    use_case = AuthorizeActionUseCase(mock_permission_checker)

    await use_case.execute("u1", tree.workspace_id, tree.ref("task"), PermissionAction.EDIT_TASK)

    mock_permission_checker.check.assert_awaited_once_with(
        "u1", tree.workspace_id, tree.ref("task"), PermissionAction.EDIT_TASK
    )


@pytest.mark.asyncio
async def test_authorize_denied(mock_permission_checker, tree: Tree) -> None:
    mock_permission_checker.check.return_value = Verdict.DENY
    use_case = AuthorizeActionUseCase(mock_permission_checker)

    with pytest.raises(PermissionDenied, match="EDIT_TASK"):
        await use_case.execute("u1", tree.workspace_id, tree.ref("task"), "EDIT_TASK")


@pytest.mark.asyncio
async def test_authorize_not_found_propagates(uow_factory, tree: Tree) -> None:
    use_case = AuthorizeActionUseCase(ScopeGatePermissionChecker(uow_factory))

    with pytest.raises(NotFound):
        await use_case.execute(
            "u1", tree.workspace_id, ResourceRef(ResourceKind.LIST, uuid4()), "VIEW_LIST"
        )


@pytest.mark.asyncio
async def test_require_min_role(mock_permission_checker, tree: Tree) -> None:
    use_case = AuthorizeActionUseCase(mock_permission_checker)
    await use_case.require_min_role("u1", tree.workspace_id, WorkspaceRole.ADMIN)

    mock_permission_checker.check_min_role.return_value = Verdict.DENY
    with pytest.raises(PermissionDenied, match="admin"):
        await use_case.require_min_role("u1", tree.workspace_id, WorkspaceRole.ADMIN)


# --- GrantOverrideUseCase ---


@pytest.mark.asyncio
async def test_grant_creates_override(
    uow_factory, fake_uow: FakeUnitOfWork, tree: Tree, mock_permission_checker
) -> None:
    fake_uow.memberships.add_member(tree.workspace_id, "u2", WorkspaceRole.GUEST)
    use_case = GrantOverrideUseCase(uow_factory, mock_permission_checker)

    override = await use_case.execute("admin", tree.ref("task_list"), "u2", "edit")

    assert override.scope is ScopeKind.LIST
    assert override.level is PermissionLevel.EDIT
    assert override.workspace_id == tree.workspace_id
    assert override.space_id == tree.space.space_id
    assert override.folder_id == tree.folder.folder_id
    assert override.granted_by == "admin"
    mock_permission_checker.check.assert_awaited_once_with(
        "admin", tree.workspace_id, tree.task_list, PermissionAction.MANAGE_SPACE_PERMISSIONS
    )


@pytest.mark.asyncio
async def test_grant_on_space_has_no_parent_ids(
    uow_factory, fake_uow: FakeUnitOfWork, tree: Tree, mock_permission_checker
) -> None:
    fake_uow.memberships.add_member(tree.workspace_id, "u2", WorkspaceRole.MEMBER)
    use_case = GrantOverrideUseCase(uow_factory, mock_permission_checker)

    override = await use_case.execute("admin", tree.ref("space"), "u2", PermissionLevel.FULL)

    assert override.space_id is None
    assert override.folder_id is None


@pytest.mark.asyncio
async def test_grant_twice_updates_level(
    uow_factory, fake_uow: FakeUnitOfWork, tree: Tree, mock_permission_checker
) -> None:
    """One override per (user, resource): a second grant changes the level in place."""
    fake_uow.memberships.add_member(tree.workspace_id, "u2", WorkspaceRole.GUEST)
    use_case = GrantOverrideUseCase(uow_factory, mock_permission_checker)

    first = await use_case.execute("admin", tree.ref("folder"), "u2", "VIEW")
    second = await use_case.execute("owner", tree.ref("folder"), "u2", "FULL")

    assert second.id == first.id
    assert second.level is PermissionLevel.FULL
    assert second.granted_by == "owner"
    assert len(await fake_uow.overrides.list_by_resource(ScopeKind.FOLDER, tree.folder.folder_id)) == 1


@pytest.mark.asyncio
async def test_grant_invalid_level(uow_factory, tree: Tree, mock_permission_checker) -> None:
    use_case = GrantOverrideUseCase(uow_factory, mock_permission_checker)

    with pytest.raises(ValidationError, match="Invalid permission level"):
        await use_case.execute("admin", tree.ref("space"), "u2", "SUPER")

    mock_permission_checker.check.assert_not_awaited()


@pytest.mark.asyncio
async def test_grant_on_task_rejected(uow_factory, tree: Tree, mock_permission_checker) -> None:
    use_case = GrantOverrideUseCase(uow_factory, mock_permission_checker)

    with pytest.raises(ValidationError):
        await use_case.execute("admin", tree.ref("task"), "u2", "VIEW")


@pytest.mark.asyncio
async def test_grant_requires_manage_permission(
    uow_factory, fake_uow: FakeUnitOfWork, tree: Tree, mock_permission_checker
) -> None:
    fake_uow.memberships.add_member(tree.workspace_id, "u2", WorkspaceRole.GUEST)
    mock_permission_checker.check.return_value = Verdict.DENY
    use_case = GrantOverrideUseCase(uow_factory, mock_permission_checker)

    with pytest.raises(PermissionDenied, match="manage permissions"):
        await use_case.execute("member", tree.ref("space"), "u2", "FULL")

    assert await fake_uow.overrides.get_override(ScopeKind.SPACE, "u2", tree.space.space_id) is None


@pytest.mark.asyncio
async def test_grant_requires_target_membership(
    uow_factory, tree: Tree, mock_permission_checker
) -> None:
    use_case = GrantOverrideUseCase(uow_factory, mock_permission_checker)

    with pytest.raises(ValidationError, match="workspace member"):
        await use_case.execute("admin", tree.ref("space"), "outsider", "VIEW")


@pytest.mark.asyncio
async def test_grant_on_missing_resource(uow_factory, mock_permission_checker) -> None:
    use_case = GrantOverrideUseCase(uow_factory, mock_permission_checker)

    with pytest.raises(NotFound, match="Folder"):
        await use_case.execute("admin", ResourceRef(ResourceKind.FOLDER, uuid4()), "u2", "VIEW")


@pytest.mark.asyncio
async def test_grant_with_real_checker(uow_factory, fake_uow: FakeUnitOfWork, tree: Tree) -> None:
    """Space FULL does not include managing permissions; that stays with the role."""
    fake_uow.memberships.add_member(tree.workspace_id, "lead", WorkspaceRole.MEMBER)
    fake_uow.memberships.add_member(tree.workspace_id, "u2", WorkspaceRole.GUEST)
    fake_uow.overrides.add(
        ScopeKind.SPACE, "lead", tree.space.space_id, tree.workspace_id, PermissionLevel.FULL
    )
    use_case = GrantOverrideUseCase(uow_factory, ScopeGatePermissionChecker(uow_factory))

    with pytest.raises(PermissionDenied):
        await use_case.execute("lead", tree.ref("space"), "u2", "EDIT")
    with pytest.raises(PermissionDenied):
        await use_case.execute("u2", tree.ref("space"), "lead", "EDIT")


@pytest.mark.asyncio
async def test_grant_by_admin_with_real_checker(
    uow_factory, fake_uow: FakeUnitOfWork, tree: Tree
) -> None:
    fake_uow.memberships.add_member(tree.workspace_id, "admin", WorkspaceRole.ADMIN)
    fake_uow.memberships.add_member(tree.workspace_id, "u2", WorkspaceRole.GUEST)
    checker = ScopeGatePermissionChecker(uow_factory)
    use_case = GrantOverrideUseCase(uow_factory, checker)

    await use_case.execute("admin", tree.ref("task_list"), "u2", "EDIT")

    assert await checker.check("u2", tree.workspace_id, tree.task, "EDIT_TASK") is Verdict.ALLOW
    assert await checker.check("u2", tree.workspace_id, tree.task, "DELETE_TASK") is Verdict.DENY


# --- RevokeOverrideUseCase ---


@pytest.mark.asyncio
async def test_revoke_removes_override(
    uow_factory, fake_uow: FakeUnitOfWork, tree: Tree, mock_permission_checker
) -> None:
    fake_uow.overrides.add(
        ScopeKind.FOLDER, "u2", tree.folder.folder_id, tree.workspace_id, PermissionLevel.EDIT
    )
    use_case = RevokeOverrideUseCase(uow_factory, mock_permission_checker)

    await use_case.execute("admin", tree.ref("folder"), "u2")

    assert await fake_uow.overrides.get_override(ScopeKind.FOLDER, "u2", tree.folder.folder_id) is None


@pytest.mark.asyncio
async def test_revoke_missing_override(uow_factory, tree: Tree, mock_permission_checker) -> None:
    use_case = RevokeOverrideUseCase(uow_factory, mock_permission_checker)

    with pytest.raises(NotFound, match="Override"):
        await use_case.execute("admin", tree.ref("folder"), "u2")


@pytest.mark.asyncio
async def test_revoke_denied(
    uow_factory, fake_uow: FakeUnitOfWork, tree: Tree, mock_permission_checker
) -> None:
    fake_uow.overrides.add(
        ScopeKind.SPACE, "u2", tree.space.space_id, tree.workspace_id, PermissionLevel.VIEW
    )
    mock_permission_checker.check.return_value = Verdict.DENY
    use_case = RevokeOverrideUseCase(uow_factory, mock_permission_checker)

    with pytest.raises(PermissionDenied):
        await use_case.execute("guest", tree.ref("space"), "u2")

    assert await fake_uow.overrides.get_override(ScopeKind.SPACE, "u2", tree.space.space_id)


# --- PurgeMemberOverridesUseCase ---


@pytest.mark.asyncio
async def test_purge_removes_every_scope(
    uow_factory, fake_uow: FakeUnitOfWork, tree: Tree, mock_permission_checker
) -> None:
    ws = tree.workspace_id
    fake_uow.overrides.add(ScopeKind.SPACE, "u2", tree.space.space_id, ws, "VIEW")
    fake_uow.overrides.add(ScopeKind.FOLDER, "u2", tree.folder.folder_id, ws, "EDIT")
    fake_uow.overrides.add(ScopeKind.LIST, "u2", tree.task_list.list_id, ws, "FULL")
    fake_uow.overrides.add(ScopeKind.LIST, "u3", tree.task_list.list_id, ws, "FULL")
    use_case = PurgeMemberOverridesUseCase(uow_factory, mock_permission_checker)

    removed = await use_case.execute("admin", ws, "u2")

    assert removed == 3
    assert len(await fake_uow.overrides.list_by_resource(ScopeKind.LIST, tree.task_list.list_id)) == 1
    mock_permission_checker.check_min_role.assert_awaited_once_with("admin", ws, WorkspaceRole.ADMIN)


@pytest.mark.asyncio
async def test_purge_requires_admin(uow_factory, tree: Tree, mock_permission_checker) -> None:
    mock_permission_checker.check_min_role.return_value = Verdict.DENY
    use_case = PurgeMemberOverridesUseCase(uow_factory, mock_permission_checker)

    with pytest.raises(PermissionDenied, match="admins"):
        await use_case.execute("member", tree.workspace_id, "u2")


# --- ListOverridesUseCase ---


@pytest.mark.asyncio
async def test_list_overrides(
    uow_factory, fake_uow: FakeUnitOfWork, tree: Tree, mock_permission_checker
) -> None:
    ws = tree.workspace_id
    fake_uow.overrides.add(ScopeKind.SPACE, "u2", tree.space.space_id, ws, "VIEW")
    fake_uow.overrides.add(ScopeKind.SPACE, "u3", tree.space.space_id, ws, "FULL")
    use_case = ListOverridesUseCase(uow_factory, mock_permission_checker)

    overrides = await use_case.execute("viewer", tree.ref("space"))

    assert {o.user_id for o in overrides} == {"u2", "u3"}
    mock_permission_checker.check.assert_awaited_once_with(
        "viewer", ws, tree.space, PermissionAction.VIEW_SPACE
    )


@pytest.mark.asyncio
async def test_list_overrides_requires_view(
    uow_factory, tree: Tree, mock_permission_checker
) -> None:
    mock_permission_checker.check.return_value = Verdict.DENY
    use_case = ListOverridesUseCase(uow_factory, mock_permission_checker)

    with pytest.raises(PermissionDenied, match="VIEW_LIST"):
        await use_case.execute("stranger", tree.ref("loose_list"))
