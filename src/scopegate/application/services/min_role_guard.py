"""Min-role guard - rank comparison for non-delegable workspace actions."""

import logging
from uuid import UUID

from scopegate.application.ports import MembershipReader
from scopegate.domain.value_objects import Verdict, WorkspaceRole, role_has_min_level

logger = logging.getLogger(__name__)


class MinRoleGuard:
    """Membership plus rank check. Overrides are never consulted."""

    def __init__(self, memberships: MembershipReader) -> None:
        self._memberships = memberships

    async def require_min_role(
        self, user_id: str, workspace_id: UUID, min_role: WorkspaceRole | str
    ) -> Verdict:
        """ALLOW if the user is a member whose role ranks at least min_role."""
        min_role = WorkspaceRole.parse(min_role)
        role = await self._memberships.get_workspace_role(user_id, workspace_id)
        if role is None:
            logger.debug("Deny min role %s for %s: not a workspace member", min_role, user_id)
            return Verdict.DENY
        if role_has_min_level(role, min_role):
            return Verdict.ALLOW
        logger.debug("Deny min role %s for %s: holds %s", min_role, user_id, role)
        return Verdict.DENY
