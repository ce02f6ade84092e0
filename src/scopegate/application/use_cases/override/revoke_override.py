"""Revoke override use case."""

from scopegate.application.ports import PermissionChecker, UnitOfWorkFactory
from scopegate.application.use_cases.override.resource_scope import (
    load_live_path,
    override_scope,
)
from scopegate.domain.exceptions import NotFound, PermissionDenied
from scopegate.domain.value_objects import PermissionAction, ResourceRef


class RevokeOverrideUseCase:
    """Remove a user's override on a space, folder or list."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, resource: ResourceRef, user_id: str) -> None:
        """Delete the override. Actor must manage permissions on resource."""
        scope = override_scope(resource)

        async with self._uow_factory() as uow:
            path = await load_live_path(uow, resource)

        verdict = await self._permission_checker.check(
            actor_id, path.workspace_id, path, PermissionAction.MANAGE_SPACE_PERMISSIONS
        )
        if not verdict.allowed:
            raise PermissionDenied("User cannot manage permissions on this resource")

        async with self._uow_factory() as uow:
            deleted = await uow.overrides.delete(scope, user_id, resource.id)
            if not deleted:
                raise NotFound("Override", f"{resource}/{user_id}")
