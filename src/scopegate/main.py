"""Application entry point and composition root."""

import argparse
import asyncio
import logging
import sys
from uuid import UUID

from scopegate import __version__
from scopegate.application.ports import UnitOfWorkFactory
from scopegate.application.use_cases.authorization.authorize_action import (
    AuthorizeActionUseCase,
)
from scopegate.application.use_cases.override.grant_override import GrantOverrideUseCase
from scopegate.application.use_cases.override.list_overrides import ListOverridesUseCase
from scopegate.application.use_cases.override.purge_member_overrides import (
    PurgeMemberOverridesUseCase,
)
from scopegate.application.use_cases.override.revoke_override import RevokeOverrideUseCase
from scopegate.config import Settings, get_settings
from scopegate.domain.exceptions import (
    ConfigurationError,
    NotFound,
    PermissionDenied,
    StorageError,
    ValidationError,
)
from scopegate.domain.value_objects import ResourceKind, ResourceRef, ScopeKind, Verdict
from scopegate.infrastructure.audit.logging_recorder import LoggingDecisionRecorder
from scopegate.infrastructure.permission.permission_checker import ScopeGatePermissionChecker
from scopegate.infrastructure.persistence.postgres.connection import create_pool
from scopegate.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from scopegate.logging_config import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DENY = 1
EXIT_NOT_FOUND = 2
EXIT_CONFIGURATION_ERROR = 3
EXIT_STORAGE_ERROR = 4
EXIT_INVALID = 5


class Container:
    """Wired services for one process."""

    def __init__(self, uow_factory: UnitOfWorkFactory, settings: Settings) -> None:
        recorder = LoggingDecisionRecorder() if settings.audit_log_enabled else None
        self.permission_checker = ScopeGatePermissionChecker(uow_factory, recorder)
        self.authorize_action = AuthorizeActionUseCase(self.permission_checker)
        self.grant_override = GrantOverrideUseCase(
            unit_of_work_factory=uow_factory,
            permission_checker=self.permission_checker,
        )
        self.revoke_override = RevokeOverrideUseCase(
            unit_of_work_factory=uow_factory,
            permission_checker=self.permission_checker,
        )
        self.purge_member_overrides = PurgeMemberOverridesUseCase(
            unit_of_work_factory=uow_factory,
            permission_checker=self.permission_checker,
        )
        self.list_overrides = ListOverridesUseCase(
            unit_of_work_factory=uow_factory,
            permission_checker=self.permission_checker,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scopegate", description="Workspace permission checks")
    parser.add_argument("--version", action="version", version=f"scopegate {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Resolve one action for one user")
    check.add_argument("--user", required=True, help="Authenticated user id")
    check.add_argument("--workspace", required=True, type=UUID, help="Workspace id")
    check.add_argument(
        "--kind",
        required=True,
        choices=[k.value for k in ResourceKind],
        help="Kind of the target resource",
    )
    check.add_argument("--resource", required=True, type=UUID, help="Target resource id")
    check.add_argument("--action", required=True, help="Action name, e.g. EDIT_TASK")

    grant = sub.add_parser("grant", help="Grant or change an override")
    _add_override_target(grant)
    grant.add_argument("--user", required=True, help="User receiving the override")
    grant.add_argument("--level", required=True, help="FULL, EDIT, COMMENT or VIEW")

    revoke = sub.add_parser("revoke", help="Remove an override")
    _add_override_target(revoke)
    revoke.add_argument("--user", required=True, help="User losing the override")

    overrides = sub.add_parser("overrides", help="List overrides on a resource")
    _add_override_target(overrides)

    purge = sub.add_parser("purge", help="Delete all overrides of a departing member")
    purge.add_argument("--actor", required=True, help="Acting user id")
    purge.add_argument("--workspace", required=True, type=UUID, help="Workspace id")
    purge.add_argument("--user", required=True, help="Departing member")
    return parser


def _add_override_target(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--actor", required=True, help="Acting user id")
    parser.add_argument(
        "--kind",
        required=True,
        choices=[k.value for k in ScopeKind],
        help="Scope carrying the override",
    )
    parser.add_argument("--resource", required=True, type=UUID, help="Space, folder or list id")


def _scope_ref(args: argparse.Namespace) -> ResourceRef:
    return ResourceRef(ResourceKind(args.kind), args.resource)


async def dispatch(container: Container, args: argparse.Namespace) -> int:
    """Run one parsed command. Returns the process exit code."""
    try:
        if args.command == "check":
            resource = ResourceRef(ResourceKind(args.kind), args.resource)
            verdict = await container.permission_checker.check(
                args.user, args.workspace, resource, args.action
            )
            print(verdict.value)
            return EXIT_OK if verdict is Verdict.ALLOW else EXIT_DENY

        if args.command == "grant":
            override = await container.grant_override.execute(
                args.actor, _scope_ref(args), args.user, args.level
            )
            print(f"{override.scope} {override.resource_id} {override.user_id} {override.level}")
        elif args.command == "revoke":
            await container.revoke_override.execute(args.actor, _scope_ref(args), args.user)
            print("revoked")
        elif args.command == "overrides":
            for o in await container.list_overrides.execute(args.actor, _scope_ref(args)):
                print(f"{o.user_id} {o.level} granted_by={o.granted_by}")
        elif args.command == "purge":
            removed = await container.purge_member_overrides.execute(
                args.actor, args.workspace, args.user
            )
            print(f"removed {removed}")
        return EXIT_OK
    except PermissionDenied as e:
        print(f"deny: {e}")
        return EXIT_DENY
    except NotFound as e:
        print(f"not_found: {e}")
        return EXIT_NOT_FOUND
    except ConfigurationError as e:
        print(f"configuration_error: {e}")
        return EXIT_CONFIGURATION_ERROR
    except StorageError as e:
        print(f"storage_error: {e}")
        return EXIT_STORAGE_ERROR
    except ValidationError as e:
        print(f"invalid: {e}")
        return EXIT_INVALID


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """Open the pool, run one command against the configured database, close the pool."""
    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    await pool.open()
    try:
        return await dispatch(Container(create_uow_factory(pool), settings), args)
    finally:
        await pool.close()


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings)
    logger.debug("scopegate v%s (%s)", __version__, settings.environment)
    sys.exit(asyncio.run(run(args, settings)))


if __name__ == "__main__":
    main()
