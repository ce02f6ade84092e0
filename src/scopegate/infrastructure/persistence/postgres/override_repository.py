"""PostgreSQL override repository - one implementation for all three scopes."""

from uuid import UUID

from psycopg import AsyncConnection

from scopegate.domain.entities import ScopeOverride
from scopegate.domain.exceptions import ConfigurationError
from scopegate.domain.value_objects import PermissionLevel, ScopeKind
from scopegate.infrastructure.persistence.postgres.errors import storage_errors

OVERRIDE_TABLES: dict[ScopeKind, str] = {
    ScopeKind.SPACE: "space_override",
    ScopeKind.FOLDER: "folder_override",
    ScopeKind.LIST: "list_override",
}

_COLUMNS = (
    "id, user_id, resource_id, workspace_id, level, granted_by, "
    "created_at, updated_at, space_id, folder_id"
)


def _table(scope: ScopeKind) -> str:
    try:
        return OVERRIDE_TABLES[ScopeKind(scope)]
    except (KeyError, ValueError) as e:
        raise ConfigurationError(f"No override table for scope: {scope!r}") from e


def _upsert_sql(scope: ScopeKind) -> str:
    """INSERT that converges concurrent grants on the (user_id, resource_id) unique index."""
    return (
        f"INSERT INTO {_table(scope)} ({_COLUMNS}) "
        "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s) "
        "ON CONFLICT (user_id, resource_id) DO UPDATE SET "
        "level = EXCLUDED.level, granted_by = EXCLUDED.granted_by, "
        "updated_at = EXCLUDED.updated_at "
        f"RETURNING {_COLUMNS}"
    )


def _row_to_override(scope: ScopeKind, r: tuple) -> ScopeOverride:
    return ScopeOverride(
        id=r[0],
        scope=scope,
        user_id=r[1],
        resource_id=r[2],
        workspace_id=r[3],
        level=PermissionLevel.parse(r[4]),
        granted_by=r[5],
        created_at=r[6],
        updated_at=r[7],
        space_id=r[8],
        folder_id=r[9],
    )


class PostgresOverrideRepository:
    """Override repository implementation over space/folder/list override tables."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_override(
        self, scope: ScopeKind, user_id: str, resource_id: UUID
    ) -> ScopeOverride | None:
        """Get override for user on resource at scope."""
        with storage_errors(f"get_override({scope})"):
            cur = await self._conn.execute(
                f"SELECT {_COLUMNS} FROM {_table(scope)} WHERE user_id = %s AND resource_id = %s",
                (user_id, resource_id),
            )
            r = await cur.fetchone()
        if not r:
            return None
        return _row_to_override(scope, r)

    async def list_by_resource(self, scope: ScopeKind, resource_id: UUID) -> list[ScopeOverride]:
        """List overrides set on resource."""
        with storage_errors(f"list_by_resource({scope})"):
            cur = await self._conn.execute(
                f"SELECT {_COLUMNS} FROM {_table(scope)} WHERE resource_id = %s "
                "ORDER BY created_at",
                (resource_id,),
            )
            rows = await cur.fetchall()
        return [_row_to_override(scope, r) for r in rows]

    async def upsert(self, override: ScopeOverride) -> ScopeOverride:
        """Create override, or update level of the existing one for (user, resource)."""
        with storage_errors(f"upsert({override.scope})"):
            cur = await self._conn.execute(
                _upsert_sql(override.scope),
                (
                    override.id,
                    override.user_id,
                    override.resource_id,
                    override.workspace_id,
                    override.level.value,
                    override.granted_by,
                    override.created_at,
                    override.updated_at,
                    override.space_id,
                    override.folder_id,
                ),
            )
            r = await cur.fetchone()
        return _row_to_override(override.scope, r)

    async def delete(self, scope: ScopeKind, user_id: str, resource_id: UUID) -> bool:
        """Delete override. Returns False if none existed."""
        with storage_errors(f"delete({scope})"):
            cur = await self._conn.execute(
                f"DELETE FROM {_table(scope)} WHERE user_id = %s AND resource_id = %s",
                (user_id, resource_id),
            )
        return cur.rowcount > 0

    async def delete_for_member(self, workspace_id: UUID, user_id: str) -> int:
        """Delete all overrides of user in workspace, at every scope."""
        removed = 0
        for scope in ScopeKind:
            with storage_errors(f"delete_for_member({scope})"):
                cur = await self._conn.execute(
                    f"DELETE FROM {_table(scope)} WHERE workspace_id = %s AND user_id = %s",
                    (workspace_id, user_id),
                )
            removed += cur.rowcount
        return removed
