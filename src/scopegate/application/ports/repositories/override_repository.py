"""Override repository port - one interface for space, folder and list overrides."""

from typing import Protocol
from uuid import UUID

from scopegate.domain.entities import ScopeOverride
from scopegate.domain.value_objects import ScopeKind


class OverrideRepository(Protocol):
    """Port for override persistence, parameterized by scope."""

    async def get_override(
        self, scope: ScopeKind, user_id: str, resource_id: UUID
    ) -> ScopeOverride | None: ...

    async def list_by_resource(self, scope: ScopeKind, resource_id: UUID) -> list[ScopeOverride]: ...

    async def upsert(self, override: ScopeOverride) -> ScopeOverride: ...

    async def delete(self, scope: ScopeKind, user_id: str, resource_id: UUID) -> bool: ...

    async def delete_for_member(self, workspace_id: UUID, user_id: str) -> int: ...
