"""Grant override use case."""

from datetime import UTC, datetime
from uuid import uuid4

from scopegate.application.ports import PermissionChecker, UnitOfWorkFactory
from scopegate.application.use_cases.override.resource_scope import (
    load_live_path,
    override_scope,
)
from scopegate.domain.entities import ScopeOverride
from scopegate.domain.exceptions import ConfigurationError, PermissionDenied, ValidationError
from scopegate.domain.value_objects import (
    PermissionAction,
    PermissionLevel,
    ResourceRef,
    ScopeKind,
)


class GrantOverrideUseCase:
    """Set a user's permission level on a space, folder or list."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(
        self,
        actor_id: str,
        resource: ResourceRef,
        user_id: str,
        level: PermissionLevel | str,
    ) -> ScopeOverride:
        """Create or update the override. Actor must manage permissions on resource."""
        scope = override_scope(resource)
        try:
            level = PermissionLevel.parse(level)
        except ConfigurationError as e:
            raise ValidationError(
                f"Invalid permission level. Must be one of: {', '.join(PermissionLevel)}"
            ) from e

        async with self._uow_factory() as uow:
            path = await load_live_path(uow, resource)

        verdict = await self._permission_checker.check(
            actor_id, path.workspace_id, path, PermissionAction.MANAGE_SPACE_PERMISSIONS
        )
        if not verdict.allowed:
            raise PermissionDenied("User cannot manage permissions on this resource")

        async with self._uow_factory() as uow:
            role = await uow.memberships.get_workspace_role(user_id, path.workspace_id)
            if role is None:
                raise ValidationError("User must be a workspace member first")

            now = datetime.now(UTC)
            override = ScopeOverride(
                id=uuid4(),
                scope=scope,
                user_id=user_id,
                resource_id=resource.id,
                workspace_id=path.workspace_id,
                level=level,
                granted_by=actor_id,
                created_at=now,
                updated_at=now,
                space_id=path.space_id if scope is not ScopeKind.SPACE else None,
                folder_id=path.folder_id if scope is ScopeKind.LIST else None,
            )
            return await uow.overrides.upsert(override)
