"""Pytest fixtures for scopegate tests."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from scopegate.domain.entities import AccessDecision, ScopeOverride
from scopegate.domain.value_objects import (
    PermissionLevel,
    ResourcePath,
    ResourceRef,
    ScopeKind,
    Verdict,
    WorkspaceRole,
)


# --- Fake repositories ---


class FakeMembershipRepository:
    """In-memory membership repository. Stores roles as given, like the raw column."""

    def __init__(self) -> None:
        self._roles: dict[tuple[str, UUID], WorkspaceRole | str] = {}
        self.reads = 0

    async def get_workspace_role(
        self, user_id: str, workspace_id: UUID
    ) -> WorkspaceRole | str | None:
        self.reads += 1
        return self._roles.get((user_id, workspace_id))

    def add_member(self, workspace_id: UUID, user_id: str, role: WorkspaceRole | str) -> None:
        self._roles[(user_id, workspace_id)] = role

    def remove_member(self, workspace_id: UUID, user_id: str) -> None:
        self._roles.pop((user_id, workspace_id), None)


class FakeOverrideRepository:
    """In-memory override repository, unique per (scope, user, resource)."""

    def __init__(self) -> None:
        self._by_key: dict[tuple[ScopeKind, str, UUID], ScopeOverride] = {}
        self.reads = 0

    async def get_override(
        self, scope: ScopeKind, user_id: str, resource_id: UUID
    ) -> ScopeOverride | None:
        self.reads += 1
        return self._by_key.get((scope, user_id, resource_id))

    async def list_by_resource(self, scope: ScopeKind, resource_id: UUID) -> list[ScopeOverride]:
        items = [
            o
            for (s, _, rid), o in self._by_key.items()
            if s == scope and rid == resource_id
        ]
        return sorted(items, key=lambda o: o.created_at)

    async def upsert(self, override: ScopeOverride) -> ScopeOverride:
        key = (override.scope, override.user_id, override.resource_id)
        existing = self._by_key.get(key)
        if existing:
            override = replace(
                existing,
                level=override.level,
                granted_by=override.granted_by,
                updated_at=override.updated_at,
            )
        self._by_key[key] = override
        return override

    async def delete(self, scope: ScopeKind, user_id: str, resource_id: UUID) -> bool:
        return self._by_key.pop((scope, user_id, resource_id), None) is not None

    async def delete_for_member(self, workspace_id: UUID, user_id: str) -> int:
        keys = [
            k
            for k, o in self._by_key.items()
            if o.workspace_id == workspace_id and o.user_id == user_id
        ]
        for k in keys:
            del self._by_key[k]
        return len(keys)

    def add(
        self,
        scope: ScopeKind,
        user_id: str,
        resource_id: UUID,
        workspace_id: UUID,
        level: PermissionLevel | str,
    ) -> ScopeOverride:
        now = datetime.now(UTC)
        override = ScopeOverride(
            id=uuid4(),
            scope=scope,
            user_id=user_id,
            resource_id=resource_id,
            workspace_id=workspace_id,
            level=level,
            granted_by="seed",
            created_at=now,
            updated_at=now,
        )
        self._by_key[(scope, user_id, resource_id)] = override
        return override


class FakeHierarchyRepository:
    """In-memory hierarchy repository keyed by resource reference."""

    def __init__(self) -> None:
        self._paths: dict[ResourceRef, ResourcePath] = {}
        self.reads = 0

    async def get_ancestors(self, resource: ResourceRef) -> ResourcePath | None:
        self.reads += 1
        return self._paths.get(resource)

    def add_path(self, path: ResourcePath) -> ResourcePath:
        self._paths[path.target] = path
        return path

    def remove(self, resource: ResourceRef) -> None:
        self._paths.pop(resource, None)


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.memberships = FakeMembershipRepository()
        self.overrides = FakeOverrideRepository()
        self.hierarchy = FakeHierarchyRepository()
        self.commits = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        pass


class FakeDecisionRecorder:
    """Collects recorded decisions in memory."""

    def __init__(self) -> None:
        self.decisions: list[AccessDecision] = []

    async def record(self, decision: AccessDecision) -> None:
        self.decisions.append(decision)


# --- Hierarchy ---


@dataclass
class Tree:
    """One workspace: space > folder > list > task, plus a list directly under the space."""

    workspace: ResourcePath
    space: ResourcePath
    folder: ResourcePath
    task_list: ResourcePath
    task: ResourcePath
    loose_list: ResourcePath

    @property
    def workspace_id(self) -> UUID:
        return self.workspace.workspace_id

    def ref(self, name: str) -> ResourceRef:
        return getattr(self, name).target


def build_tree(hierarchy: FakeHierarchyRepository) -> Tree:
    """Register a fresh hierarchy in the fake repository."""
    ws, space, folder, lst, task, loose = (uuid4() for _ in range(6))
    return Tree(
        workspace=hierarchy.add_path(ResourcePath.for_workspace(ws)),
        space=hierarchy.add_path(ResourcePath(ws, space)),
        folder=hierarchy.add_path(ResourcePath(ws, space, folder)),
        task_list=hierarchy.add_path(ResourcePath(ws, space, folder, lst)),
        task=hierarchy.add_path(ResourcePath(ws, space, folder, lst, task)),
        loose_list=hierarchy.add_path(ResourcePath(ws, space, list_id=loose)),
    )


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager; every call shares fake_uow's state."""

    @asynccontextmanager
    async def _factory():
        yield fake_uow
        await fake_uow.commit()

    return _factory


@pytest.fixture
def tree(fake_uow: FakeUnitOfWork) -> Tree:
    """Workspace hierarchy registered in fake_uow."""
    return build_tree(fake_uow.hierarchy)


@pytest.fixture
def recorder() -> FakeDecisionRecorder:
    return FakeDecisionRecorder()


@pytest.fixture
def mock_permission_checker():
    """AsyncMock for PermissionChecker - allows everything by default."""
    mock = AsyncMock()
    mock.check.return_value = Verdict.ALLOW
    mock.check_min_role.return_value = Verdict.ALLOW
    return mock
