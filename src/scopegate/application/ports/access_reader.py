"""Read ports consumed by the permission resolver."""

from typing import Protocol
from uuid import UUID

from scopegate.domain.entities import ScopeOverride
from scopegate.domain.value_objects import ResourcePath, ResourceRef, ScopeKind, WorkspaceRole


class MembershipReader(Protocol):
    """Port for workspace role lookup. None means the user is not a member."""

    async def get_workspace_role(self, user_id: str, workspace_id: UUID) -> WorkspaceRole | None: ...


class OverrideReader(Protocol):
    """Port for per-(user, resource) override lookup at one scope."""

    async def get_override(
        self, scope: ScopeKind, user_id: str, resource_id: UUID
    ) -> ScopeOverride | None: ...


class HierarchyReader(Protocol):
    """Port for ancestor chain lookup. None means missing or soft-deleted."""

    async def get_ancestors(self, resource: ResourceRef) -> ResourcePath | None: ...
