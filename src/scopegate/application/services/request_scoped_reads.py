"""Request-scoped memoization of permission reads."""

from typing import Any
from uuid import UUID

from scopegate.application.ports import HierarchyReader, MembershipReader, OverrideReader
from scopegate.domain.entities import ScopeOverride
from scopegate.domain.exceptions import ConfigurationError
from scopegate.domain.value_objects import ResourcePath, ResourceRef, ScopeKind, WorkspaceRole

_MISS = object()


class RequestScopedReads:
    """Caches role, override and ancestor reads for the lifetime of one request.

    Build a new instance per request and drop it afterwards. Misses (not a
    member, no override, not found) are cached too. Never share an instance
    across requests: overrides may change between them.
    """

    def __init__(
        self,
        memberships: MembershipReader,
        overrides: OverrideReader,
        hierarchy: HierarchyReader | None = None,
    ) -> None:
        self._memberships = memberships
        self._overrides = overrides
        self._hierarchy = hierarchy
        self._roles: dict[tuple[str, UUID], WorkspaceRole | None] = {}
        self._scope_overrides: dict[tuple[ScopeKind, str, UUID], ScopeOverride | None] = {}
        self._paths: dict[ResourceRef, ResourcePath | None] = {}

    async def get_workspace_role(self, user_id: str, workspace_id: UUID) -> WorkspaceRole | None:
        key = (user_id, workspace_id)
        cached: Any = self._roles.get(key, _MISS)
        if cached is _MISS:
            cached = await self._memberships.get_workspace_role(user_id, workspace_id)
            self._roles[key] = cached
        return cached

    async def get_override(
        self, scope: ScopeKind, user_id: str, resource_id: UUID
    ) -> ScopeOverride | None:
        key = (scope, user_id, resource_id)
        cached: Any = self._scope_overrides.get(key, _MISS)
        if cached is _MISS:
            cached = await self._overrides.get_override(scope, user_id, resource_id)
            self._scope_overrides[key] = cached
        return cached

    async def get_ancestors(self, resource: ResourceRef) -> ResourcePath | None:
        if self._hierarchy is None:
            raise ConfigurationError("RequestScopedReads has no hierarchy reader")
        cached: Any = self._paths.get(resource, _MISS)
        if cached is _MISS:
            cached = await self._hierarchy.get_ancestors(resource)
            self._paths[resource] = cached
        return cached
