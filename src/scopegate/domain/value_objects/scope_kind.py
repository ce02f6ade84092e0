"""Scope kinds in the resource hierarchy."""

from enum import StrEnum


class ScopeKind(StrEnum):
    """Nested boundaries beneath a workspace that can carry overrides."""

    SPACE = "space"
    FOLDER = "folder"
    LIST = "list"


class ResourceKind(StrEnum):
    """Every kind of resource a permission check can target."""

    WORKSPACE = "workspace"
    SPACE = "space"
    FOLDER = "folder"
    LIST = "list"
    TASK = "task"
