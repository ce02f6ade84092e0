"""Repository ports."""

from scopegate.application.ports.repositories.hierarchy_repository import (
    HierarchyRepository,
)
from scopegate.application.ports.repositories.membership_repository import (
    MembershipRepository,
)
from scopegate.application.ports.repositories.override_repository import (
    OverrideRepository,
)

__all__ = [
    "HierarchyRepository",
    "MembershipRepository",
    "OverrideRepository",
]
