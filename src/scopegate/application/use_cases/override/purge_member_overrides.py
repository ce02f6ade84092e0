"""Purge member overrides use case - runs when a member leaves a workspace."""

from uuid import UUID

from scopegate.application.ports import PermissionChecker, UnitOfWorkFactory
from scopegate.domain.exceptions import PermissionDenied
from scopegate.domain.value_objects import WorkspaceRole


class PurgeMemberOverridesUseCase:
    """Delete every space, folder and list override a user holds in a workspace."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, workspace_id: UUID, user_id: str) -> int:
        """Return the number of overrides removed. Actor must be ADMIN or higher."""
        verdict = await self._permission_checker.check_min_role(
            actor_id, workspace_id, WorkspaceRole.ADMIN
        )
        if not verdict.allowed:
            raise PermissionDenied("Only workspace admins can remove members")

        async with self._uow_factory() as uow:
            return await uow.overrides.delete_for_member(workspace_id, user_id)
