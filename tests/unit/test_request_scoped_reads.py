"""Unit tests for RequestScopedReads."""

import pytest

from scopegate.application.services.request_scoped_reads import RequestScopedReads
from scopegate.domain.exceptions import ConfigurationError
from scopegate.domain.value_objects import PermissionLevel, ScopeKind, WorkspaceRole

from tests.conftest import FakeUnitOfWork, Tree


def _reads(fake_uow: FakeUnitOfWork) -> RequestScopedReads:
    return RequestScopedReads(fake_uow.memberships, fake_uow.overrides, fake_uow.hierarchy)


@pytest.mark.asyncio
async def test_role_is_read_once_per_request(fake_uow: FakeUnitOfWork, tree: Tree) -> None:
    fake_uow.memberships.add_member(tree.workspace_id, "u1", WorkspaceRole.MEMBER)
    reads = _reads(fake_uow)

    first = await reads.get_workspace_role("u1", tree.workspace_id)
    second = await reads.get_workspace_role("u1", tree.workspace_id)

    assert first == second == WorkspaceRole.MEMBER
    assert fake_uow.memberships.reads == 1


@pytest.mark.asyncio
async def test_misses_are_cached(fake_uow: FakeUnitOfWork, tree: Tree) -> None:
    """No membership and no override are remembered like any other answer."""
    reads = _reads(fake_uow)

    for _ in range(3):
        assert await reads.get_workspace_role("nobody", tree.workspace_id) is None
        assert await reads.get_override(ScopeKind.SPACE, "nobody", tree.space.space_id) is None

    assert fake_uow.memberships.reads == 1
    assert fake_uow.overrides.reads == 1


@pytest.mark.asyncio
async def test_ancestors_are_cached(fake_uow: FakeUnitOfWork, tree: Tree) -> None:
    reads = _reads(fake_uow)

    assert await reads.get_ancestors(tree.ref("task")) == tree.task
    assert await reads.get_ancestors(tree.ref("task")) == tree.task

    assert fake_uow.hierarchy.reads == 1


@pytest.mark.asyncio
async def test_new_instance_sees_changes(fake_uow: FakeUnitOfWork, tree: Tree) -> None:
    """Caches never outlive a request: a fresh instance reads current overrides."""
    await _reads(fake_uow).get_override(ScopeKind.LIST, "u1", tree.task_list.list_id)
    fake_uow.overrides.add(
        ScopeKind.LIST, "u1", tree.task_list.list_id, tree.workspace_id, PermissionLevel.EDIT
    )

    override = await _reads(fake_uow).get_override(ScopeKind.LIST, "u1", tree.task_list.list_id)

    assert override is not None
    assert override.level == PermissionLevel.EDIT


@pytest.mark.asyncio
async def test_ancestors_without_hierarchy_reader(fake_uow: FakeUnitOfWork, tree: Tree) -> None:
    reads = RequestScopedReads(fake_uow.memberships, fake_uow.overrides)

    with pytest.raises(ConfigurationError):
        await reads.get_ancestors(tree.ref("task"))
