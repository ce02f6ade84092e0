"""Hierarchy repository port."""

from typing import Protocol

from scopegate.domain.value_objects import ResourcePath, ResourceRef


class HierarchyRepository(Protocol):
    """Port for resolving a resource to its live ancestor chain."""

    async def get_ancestors(self, resource: ResourceRef) -> ResourcePath | None: ...
