"""PostgreSQL hierarchy repository - resolves a resource to its live ancestor chain."""

from psycopg import AsyncConnection

from scopegate.domain.value_objects import ResourceKind, ResourcePath, ResourceRef
from scopegate.infrastructure.persistence.postgres.errors import storage_errors

_LIVE_SPACE = (
    "JOIN workspace w ON w.id = s.workspace_id "
    "WHERE s.deleted_at IS NULL AND w.deleted_at IS NULL "
)

# A list under a folder is live only if that folder is live and in the same space.
_LIVE_LIST_FOLDER = (
    "AND l.deleted_at IS NULL "
    "AND (l.folder_id IS NULL OR "
    "(f.id IS NOT NULL AND f.deleted_at IS NULL AND f.space_id = l.space_id)) "
)

_ANCESTOR_QUERIES: dict[ResourceKind, str] = {
    ResourceKind.WORKSPACE: (
        "SELECT w.id, NULL, NULL, NULL, NULL FROM workspace w "
        "WHERE w.deleted_at IS NULL AND w.id = %s"
    ),
    ResourceKind.SPACE: (
        "SELECT s.workspace_id, s.id, NULL, NULL, NULL FROM space s "
        + _LIVE_SPACE
        + "AND s.id = %s"
    ),
    ResourceKind.FOLDER: (
        "SELECT s.workspace_id, s.id, f.id, NULL, NULL FROM folder f "
        "JOIN space s ON s.id = f.space_id "
        + _LIVE_SPACE
        + "AND f.deleted_at IS NULL AND f.id = %s"
    ),
    ResourceKind.LIST: (
        "SELECT s.workspace_id, s.id, l.folder_id, l.id, NULL FROM task_list l "
        "JOIN space s ON s.id = l.space_id "
        "LEFT JOIN folder f ON f.id = l.folder_id "
        + _LIVE_SPACE
        + _LIVE_LIST_FOLDER
        + "AND l.id = %s"
    ),
    ResourceKind.TASK: (
        "SELECT s.workspace_id, s.id, l.folder_id, l.id, t.id FROM task t "
        "JOIN task_list l ON l.id = t.list_id "
        "JOIN space s ON s.id = l.space_id "
        "LEFT JOIN folder f ON f.id = l.folder_id "
        + _LIVE_SPACE
        + _LIVE_LIST_FOLDER
        + "AND t.deleted_at IS NULL AND t.id = %s"
    ),
}


def _ancestor_query(kind: ResourceKind) -> str:
    return _ANCESTOR_QUERIES[ResourceKind(kind)]


class PostgresHierarchyRepository:
    """Hierarchy repository implementation. Soft-deleted links break the chain."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_ancestors(self, resource: ResourceRef) -> ResourcePath | None:
        """Get ancestor chain, or None if resource or any ancestor is missing or deleted."""
        with storage_errors(f"get_ancestors({resource.kind})"):
            cur = await self._conn.execute(_ancestor_query(resource.kind), (resource.id,))
            r = await cur.fetchone()
        if not r:
            return None
        return ResourcePath(
            workspace_id=r[0],
            space_id=r[1],
            folder_id=r[2],
            list_id=r[3],
            task_id=r[4],
        )
