"""PostgreSQL membership repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from scopegate.domain.value_objects import WorkspaceRole
from scopegate.infrastructure.persistence.postgres.errors import storage_errors


class PostgresMembershipRepository:
    """Workspace membership repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_workspace_role(self, user_id: str, workspace_id: UUID) -> WorkspaceRole | None:
        """Get role of user in a live workspace, None if not a member."""
        with storage_errors("get_workspace_role"):
            cur = await self._conn.execute(
                "SELECT m.role FROM workspace_member m "
                "JOIN workspace w ON w.id = m.workspace_id "
                "WHERE m.workspace_id = %s AND m.user_id = %s AND w.deleted_at IS NULL",
                (workspace_id, user_id),
            )
            r = await cur.fetchone()
        if not r:
            return None
        return WorkspaceRole.parse(r[0])
