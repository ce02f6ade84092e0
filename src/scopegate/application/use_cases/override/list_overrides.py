"""List overrides use case."""

from scopegate.application.ports import PermissionChecker, UnitOfWorkFactory
from scopegate.application.use_cases.override.resource_scope import (
    load_live_path,
    override_scope,
)
from scopegate.domain.entities import ScopeOverride
from scopegate.domain.exceptions import PermissionDenied
from scopegate.domain.value_objects import PermissionAction, ResourceRef, ScopeKind

_VIEW_ACTION = {
    ScopeKind.SPACE: PermissionAction.VIEW_SPACE,
    ScopeKind.FOLDER: PermissionAction.VIEW_FOLDER,
    ScopeKind.LIST: PermissionAction.VIEW_LIST,
}


class ListOverridesUseCase:
    """List the overrides set directly on a space, folder or list."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, resource: ResourceRef) -> list[ScopeOverride]:
        """Actor must be able to view the resource."""
        scope = override_scope(resource)

        async with self._uow_factory() as uow:
            path = await load_live_path(uow, resource)

        verdict = await self._permission_checker.check(
            actor_id, path.workspace_id, path, _VIEW_ACTION[scope]
        )
        if not verdict.allowed:
            raise PermissionDenied(f"User does not have {_VIEW_ACTION[scope]} access")

        async with self._uow_factory() as uow:
            return await uow.overrides.list_by_resource(scope, resource.id)
