"""Authorization verdict."""

from enum import StrEnum


class Verdict(StrEnum):
    """Outcome of a permission check."""

    ALLOW = "allow"
    DENY = "deny"

    @property
    def allowed(self) -> bool:
        return self is Verdict.ALLOW
