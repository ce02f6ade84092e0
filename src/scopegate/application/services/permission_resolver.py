"""Permission resolver - narrowest-scope override wins, role as last resort."""

import asyncio
import logging
from dataclasses import dataclass
from uuid import UUID

from scopegate.application.ports import HierarchyReader, MembershipReader, OverrideReader
from scopegate.domain.entities import ScopeOverride
from scopegate.domain.exceptions import ConfigurationError, NotFound
from scopegate.domain.services.action_matrix import level_has_action, role_has_action
from scopegate.domain.value_objects import (
    PermissionAction,
    PermissionLevel,
    ResourcePath,
    ResourceRef,
    ScopeKind,
    Verdict,
    WorkspaceRole,
)

logger = logging.getLogger(__name__)

NOT_A_MEMBER = "not_a_member"
ROLE = "role"


@dataclass(frozen=True)
class Resolution:
    """Verdict plus what decided it: an override scope, the role, or missing membership."""

    verdict: Verdict
    source: str
    role: WorkspaceRole | None = None
    level: PermissionLevel | None = None


def _verdict(allowed: bool) -> Verdict:
    return Verdict.ALLOW if allowed else Verdict.DENY


class PermissionResolver:
    """Decides whether a user may perform an action on a resource.

    Pure over its read ports: no writes, no locks, no state between calls.
    Reads for one resolution (role plus up to three overrides) are issued
    concurrently in a task group and evaluated in precedence order afterwards,
    so completion order never affects the verdict.
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

    async def resolve(
        self,
        user_id: str,
        workspace_id: UUID,
        path: ResourcePath,
        action: PermissionAction | str,
    ) -> Verdict:
        """Return ALLOW or DENY. Raises NotFound or ConfigurationError."""
        resolution = await self.explain(user_id, workspace_id, path, action)
        return resolution.verdict

    async def resolve_resource(
        self,
        user_id: str,
        workspace_id: UUID,
        resource: ResourceRef,
        action: PermissionAction | str,
    ) -> Verdict:
        """Load the ancestor chain of a bare resource reference, then resolve."""
        path = await self.load_path(resource, action)
        return await self.resolve(user_id, workspace_id, path, action)

    async def load_path(
        self, resource: ResourceRef, action: PermissionAction | str | None = None
    ) -> ResourcePath:
        """Fetch the live ancestor chain; NotFound if it is missing or soft-deleted."""
        if action is not None:
            PermissionAction.parse(action)
        if self._hierarchy is None:
            raise ConfigurationError("PermissionResolver has no hierarchy reader")
        path = await self._hierarchy.get_ancestors(resource)
        if path is None:
            raise NotFound(resource.kind.value.capitalize(), str(resource.id))
        if path.target != resource:
            raise NotFound(resource.kind.value.capitalize(), str(resource.id))
        return path

    async def explain(
        self,
        user_id: str,
        workspace_id: UUID,
        path: ResourcePath,
        action: PermissionAction | str,
    ) -> Resolution:
        """Resolve and report which rule produced the verdict."""
        action = PermissionAction.parse(action)
        if path.workspace_id != workspace_id:
            raise NotFound("Workspace", f"{workspace_id} does not contain {path.target}")

        if action.is_workspace_scoped:
            role = await self._memberships.get_workspace_role(user_id, workspace_id)
            resolution = self._by_role(user_id, role, action)
            self._log_deny(user_id, action, path, resolution)
            return resolution

        chain = path.scope_chain()
        role, overrides = await self._read_concurrently(user_id, workspace_id, chain)
        if role is None:
            return self._by_role(user_id, role, action)
        role = WorkspaceRole.parse(role)

        for (scope, resource_id), override in zip(chain, overrides, strict=True):
            if override is None:
                continue
            if override.workspace_id != workspace_id or override.resource_id != resource_id:
                raise ConfigurationError(
                    f"Override {override.id} does not belong to {scope} {resource_id} "
                    f"in workspace {workspace_id}"
                )
            level = PermissionLevel.parse(override.level)
            resolution = Resolution(
                verdict=_verdict(level_has_action(scope, level, action)),
                source=f"{scope.value}_override",
                role=role,
                level=level,
            )
            self._log_deny(user_id, action, path, resolution)
            return resolution

        resolution = self._by_role(user_id, role, action)
        self._log_deny(user_id, action, path, resolution)
        return resolution

    async def _read_concurrently(
        self,
        user_id: str,
        workspace_id: UUID,
        chain: list[tuple[ScopeKind, UUID]],
    ) -> tuple[WorkspaceRole | None, list[ScopeOverride | None]]:
        """Role plus one override per scope. A failed read cancels its siblings."""
        try:
            async with asyncio.TaskGroup() as tg:
                role_task = tg.create_task(
                    self._memberships.get_workspace_role(user_id, workspace_id)
                )
                override_tasks = [
                    tg.create_task(self._overrides.get_override(scope, user_id, rid))
                    for scope, rid in chain
                ]
        except ExceptionGroup as eg:
            raise eg.exceptions[0]
        return role_task.result(), [t.result() for t in override_tasks]

    def _by_role(
        self, user_id: str, role: WorkspaceRole | str | None, action: PermissionAction
    ) -> Resolution:
        if role is None:
            logger.debug("Deny %s for %s: not a workspace member", action, user_id)
            return Resolution(verdict=Verdict.DENY, source=NOT_A_MEMBER)
        role = WorkspaceRole.parse(role)
        return Resolution(
            verdict=_verdict(role_has_action(role, action)),
            source=ROLE,
            role=role,
        )

    @staticmethod
    def _log_deny(
        user_id: str, action: PermissionAction, path: ResourcePath, resolution: Resolution
    ) -> None:
        if resolution.verdict is Verdict.DENY:
            logger.debug(
                "Deny %s on %s for %s (source=%s, role=%s, level=%s)",
                action,
                path.target,
                user_id,
                resolution.source,
                resolution.role,
                resolution.level,
            )
