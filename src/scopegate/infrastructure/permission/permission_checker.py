"""Permission checker implementation - resolver over unit-of-work reads, with audit."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from uuid import UUID

from scopegate.application.ports import DecisionRecorder, UnitOfWorkFactory
from scopegate.application.services.min_role_guard import MinRoleGuard
from scopegate.application.services.permission_resolver import ROLE, PermissionResolver
from scopegate.application.services.request_scoped_reads import RequestScopedReads
from scopegate.domain.entities import AccessDecision, DecisionOutcome
from scopegate.domain.exceptions import ConfigurationError, NotFound, StorageError
from scopegate.domain.value_objects import (
    PermissionAction,
    ResourceKind,
    ResourcePath,
    ResourceRef,
    Verdict,
    WorkspaceRole,
)

logger = logging.getLogger(__name__)


def _action_name(action: PermissionAction | str) -> str:
    try:
        return PermissionAction.parse(action).value
    except ConfigurationError:
        return str(action)


def _min_role_action(min_role: WorkspaceRole | str) -> str:
    try:
        return f"MIN_ROLE:{WorkspaceRole.parse(min_role).value}"
    except ConfigurationError:
        return f"MIN_ROLE:{min_role}"


class RequestPermissionChecker:
    """Checks bound to one request: one unit of work, one read cache."""

    def __init__(
        self,
        reads: RequestScopedReads,
        decision_recorder: DecisionRecorder | None = None,
    ) -> None:
        self._resolver = PermissionResolver(reads, reads, reads)
        self._guard = MinRoleGuard(reads)
        self._recorder = decision_recorder

    async def check(
        self,
        user_id: str,
        workspace_id: UUID,
        target: ResourceRef | ResourcePath,
        action: PermissionAction | str,
    ) -> Verdict:
        """Resolve action on target. Every attempt is recorded, errors included."""
        resource = target.target if isinstance(target, ResourcePath) else target
        async with self._recording_failures(user_id, workspace_id, resource, action):
            if isinstance(target, ResourcePath):
                path = target
            else:
                path = await self._resolver.load_path(target, action)
            resolution = await self._resolver.explain(user_id, workspace_id, path, action)

        await self._record(
            user_id,
            workspace_id,
            resource,
            action,
            DecisionOutcome(resolution.verdict.value),
            source=resolution.source,
        )
        return resolution.verdict

    async def check_min_role(
        self, user_id: str, workspace_id: UUID, min_role: WorkspaceRole | str
    ) -> Verdict:
        """Role-only gate for non-delegable workspace actions. Recorded against the workspace."""
        resource = ResourceRef(ResourceKind.WORKSPACE, workspace_id)
        action = _min_role_action(min_role)
        async with self._recording_failures(user_id, workspace_id, resource, action):
            verdict = await self._guard.require_min_role(user_id, workspace_id, min_role)

        await self._record(
            user_id,
            workspace_id,
            resource,
            action,
            DecisionOutcome(verdict.value),
            source=ROLE,
        )
        return verdict

    @asynccontextmanager
    async def _recording_failures(
        self,
        user_id: str,
        workspace_id: UUID,
        resource: ResourceRef,
        action: PermissionAction | str,
    ) -> AsyncIterator[None]:
        """Record a failed check with its outcome, then re-raise."""
        try:
            yield
        except NotFound:
            await self._record(user_id, workspace_id, resource, action, DecisionOutcome.NOT_FOUND)
            raise
        except ConfigurationError as e:
            logger.error(
                "Configuration error authorizing %s on %s for %s: %s",
                action,
                resource,
                user_id,
                e,
            )
            await self._record(
                user_id, workspace_id, resource, action, DecisionOutcome.CONFIGURATION_ERROR
            )
            raise
        except StorageError as e:
            logger.error(
                "Storage error authorizing %s on %s for %s: %s",
                action,
                resource,
                user_id,
                e,
            )
            await self._record(
                user_id, workspace_id, resource, action, DecisionOutcome.STORAGE_ERROR
            )
            raise

    async def _record(
        self,
        user_id: str,
        workspace_id: UUID,
        resource: ResourceRef,
        action: PermissionAction | str,
        outcome: DecisionOutcome,
        source: str | None = None,
    ) -> None:
        if self._recorder is None:
            return
        await self._recorder.record(
            AccessDecision(
                user_id=user_id,
                workspace_id=workspace_id,
                resource=resource,
                action=_action_name(action),
                outcome=outcome,
                decided_at=datetime.now(UTC),
                source=source,
            )
        )


class ScopeGatePermissionChecker:
    """Checks user permissions against workspace roles and scope overrides."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        decision_recorder: DecisionRecorder | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._recorder = decision_recorder

    @asynccontextmanager
    async def session(self) -> AsyncIterator[RequestPermissionChecker]:
        """Request-scoped checker. Reads are memoized until the block exits."""
        async with self._uow_factory() as uow:
            reads = RequestScopedReads(uow.memberships, uow.overrides, uow.hierarchy)
            yield RequestPermissionChecker(reads, self._recorder)

    async def check(
        self,
        user_id: str,
        workspace_id: UUID,
        target: ResourceRef | ResourcePath,
        action: PermissionAction | str,
    ) -> Verdict:
        """Check a single action in its own request scope."""
        async with self.session() as checker:
            return await checker.check(user_id, workspace_id, target, action)

    async def check_min_role(
        self, user_id: str, workspace_id: UUID, min_role: WorkspaceRole | str
    ) -> Verdict:
        async with self.session() as checker:
            return await checker.check_min_role(user_id, workspace_id, min_role)
