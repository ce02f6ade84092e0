"""Permission checker port - authorization gate for use cases."""

from typing import Protocol
from uuid import UUID

from scopegate.domain.value_objects import (
    PermissionAction,
    ResourcePath,
    ResourceRef,
    Verdict,
    WorkspaceRole,
)


class PermissionChecker(Protocol):
    """Port for checking user permissions on workspace resources."""

    async def check(
        self,
        user_id: str,
        workspace_id: UUID,
        target: ResourceRef | ResourcePath,
        action: PermissionAction | str,
    ) -> Verdict: ...

    async def check_min_role(
        self, user_id: str, workspace_id: UUID, min_role: WorkspaceRole | str
    ) -> Verdict: ...
