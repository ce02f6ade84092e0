"""Scope override entity - explicit permission level for a user on one resource."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from scopegate.domain.value_objects import PermissionLevel, ScopeKind


@dataclass
class ScopeOverride:
    """Override - user holds level on a space, folder or list, independent of role.

    Unique per (user_id, resource_id). space_id is the owning space of a folder
    or list; folder_id is set only for lists that sit under a folder.
    """

    id: UUID
    scope: ScopeKind
    user_id: str
    resource_id: UUID
    workspace_id: UUID
    level: PermissionLevel
    granted_by: str
    created_at: datetime
    updated_at: datetime
    space_id: UUID | None = None
    folder_id: UUID | None = None
