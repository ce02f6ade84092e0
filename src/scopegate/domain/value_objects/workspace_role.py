"""Workspace roles, ranked."""

from enum import StrEnum

from scopegate.domain.exceptions import ConfigurationError


class WorkspaceRole(StrEnum):
    """Role a user holds in a workspace - exactly one per membership."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
    GUEST = "guest"

    @property
    def rank(self) -> int:
        return _ROLE_RANKS[self]

    @classmethod
    def parse(cls, value: "WorkspaceRole | str") -> "WorkspaceRole":
        """Coerce a stored role value. Unknown values raise ConfigurationError."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ConfigurationError(f"Unrecognized workspace role: {value!r}")


_ROLE_RANKS: dict[WorkspaceRole, int] = {
    WorkspaceRole.GUEST: 0,
    WorkspaceRole.MEMBER: 1,
    WorkspaceRole.ADMIN: 2,
    WorkspaceRole.OWNER: 3,
}


def role_has_min_level(role: WorkspaceRole | str, min_role: WorkspaceRole | str) -> bool:
    """True if role ranks at least as high as min_role."""
    return WorkspaceRole.parse(role).rank >= WorkspaceRole.parse(min_role).rank
