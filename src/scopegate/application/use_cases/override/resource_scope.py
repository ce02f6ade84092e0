"""Helpers shared by override use cases."""

from scopegate.application.ports import UnitOfWork
from scopegate.domain.exceptions import NotFound, ValidationError
from scopegate.domain.value_objects import ResourcePath, ResourceRef, ScopeKind


def override_scope(resource: ResourceRef) -> ScopeKind:
    """Scope an override on resource lives at. Workspaces and tasks carry none."""
    try:
        return ScopeKind(resource.kind.value)
    except ValueError:
        raise ValidationError(
            f"Overrides apply to spaces, folders and lists, not {resource.kind}"
        ) from None


async def load_live_path(uow: UnitOfWork, resource: ResourceRef) -> ResourcePath:
    """Ancestor chain of resource; NotFound if it or an ancestor is gone."""
    path = await uow.hierarchy.get_ancestors(resource)
    if path is None or path.target != resource:
        raise NotFound(resource.kind.value.capitalize(), str(resource.id))
    return path
