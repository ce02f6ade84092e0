"""Membership repository port."""

from typing import Protocol
from uuid import UUID

from scopegate.domain.value_objects import WorkspaceRole


class MembershipRepository(Protocol):
    """Port for workspace membership persistence (read side used by the engine)."""

    async def get_workspace_role(self, user_id: str, workspace_id: UUID) -> WorkspaceRole | None: ...
