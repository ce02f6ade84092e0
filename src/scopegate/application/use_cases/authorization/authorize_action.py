"""Authorize action use case - mandatory gate before reading or changing state."""

from uuid import UUID

from scopegate.application.ports import PermissionChecker
from scopegate.domain.exceptions import PermissionDenied
from scopegate.domain.value_objects import (
    PermissionAction,
    ResourcePath,
    ResourceRef,
    WorkspaceRole,
)


class AuthorizeActionUseCase:
    """Raise PermissionDenied unless the user may perform the action."""

    def __init__(self, permission_checker: PermissionChecker) -> None:
        self._permission_checker = permission_checker

    async def execute(
        self,
        user_id: str,
        workspace_id: UUID,
        target: ResourceRef | ResourcePath,
        action: PermissionAction | str,
    ) -> None:
        """Authorize action on target. NotFound and ConfigurationError propagate."""
        verdict = await self._permission_checker.check(user_id, workspace_id, target, action)
        if not verdict.allowed:
            raise PermissionDenied(f"User does not have permission to perform {action}")

    async def require_min_role(
        self, user_id: str, workspace_id: UUID, min_role: WorkspaceRole | str
    ) -> None:
        """Authorize a non-delegable workspace action by role rank alone."""
        verdict = await self._permission_checker.check_min_role(user_id, workspace_id, min_role)
        if not verdict.allowed:
            raise PermissionDenied(f"Requires workspace role {min_role} or higher")
