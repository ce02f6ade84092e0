"""Resource references and their ancestor chains."""

from dataclasses import dataclass
from uuid import UUID

from scopegate.domain.exceptions import NotFound
from scopegate.domain.value_objects.scope_kind import ResourceKind, ScopeKind


@dataclass(frozen=True)
class ResourceRef:
    """A bare (kind, id) pointer to a resource."""

    kind: ResourceKind
    id: UUID

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.id}"


@dataclass(frozen=True)
class ResourcePath:
    """Full ancestor chain of a resource: task -> list -> folder -> space -> workspace.

    Ids below the target are None. folder_id may also be None for a list
    that sits directly under a space.
    """

    workspace_id: UUID
    space_id: UUID | None = None
    folder_id: UUID | None = None
    list_id: UUID | None = None
    task_id: UUID | None = None

    def __post_init__(self) -> None:
        if self.task_id is not None and self.list_id is None:
            raise NotFound("List", f"parent of task {self.task_id}")
        if (self.list_id is not None or self.folder_id is not None) and self.space_id is None:
            child = self.list_id if self.list_id is not None else self.folder_id
            raise NotFound("Space", f"ancestor of {child}")

    @classmethod
    def for_workspace(cls, workspace_id: UUID) -> "ResourcePath":
        return cls(workspace_id=workspace_id)

    @property
    def target(self) -> ResourceRef:
        """The resource this path leads to (its narrowest id)."""
        if self.task_id is not None:
            return ResourceRef(ResourceKind.TASK, self.task_id)
        if self.list_id is not None:
            return ResourceRef(ResourceKind.LIST, self.list_id)
        if self.folder_id is not None:
            return ResourceRef(ResourceKind.FOLDER, self.folder_id)
        if self.space_id is not None:
            return ResourceRef(ResourceKind.SPACE, self.space_id)
        return ResourceRef(ResourceKind.WORKSPACE, self.workspace_id)

    def scope_chain(self) -> list[tuple[ScopeKind, UUID]]:
        """Override-carrying scopes on the path, narrowest first."""
        chain: list[tuple[ScopeKind, UUID]] = []
        if self.list_id is not None:
            chain.append((ScopeKind.LIST, self.list_id))
        if self.folder_id is not None:
            chain.append((ScopeKind.FOLDER, self.folder_id))
        if self.space_id is not None:
            chain.append((ScopeKind.SPACE, self.space_id))
        return chain
