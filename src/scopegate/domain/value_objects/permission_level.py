"""Permission levels for space, folder and list overrides."""

from enum import StrEnum

from scopegate.domain.exceptions import ConfigurationError


class PermissionLevel(StrEnum):
    """Level granted by an override. The same four levels exist at every scope."""

    FULL = "FULL"
    EDIT = "EDIT"
    COMMENT = "COMMENT"
    VIEW = "VIEW"

    @property
    def rank(self) -> int:
        return _LEVEL_RANKS[self]

    @classmethod
    def parse(cls, value: "PermissionLevel | str") -> "PermissionLevel":
        """Coerce a stored level value. Unknown values raise ConfigurationError."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise ConfigurationError(f"Unrecognized permission level: {value!r}")


_LEVEL_RANKS: dict[PermissionLevel, int] = {
    PermissionLevel.VIEW: 0,
    PermissionLevel.COMMENT: 1,
    PermissionLevel.EDIT: 2,
    PermissionLevel.FULL: 3,
}
