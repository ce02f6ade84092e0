"""Access decision entity - one authorization attempt and its outcome."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from scopegate.domain.value_objects import ResourceRef


class DecisionOutcome(StrEnum):
    """Every way an authorization attempt can end."""

    ALLOW = "allow"
    DENY = "deny"
    NOT_FOUND = "not_found"
    CONFIGURATION_ERROR = "configuration_error"
    STORAGE_ERROR = "storage_error"


@dataclass(frozen=True)
class AccessDecision:
    """Audit record of an attempted action."""

    user_id: str
    workspace_id: UUID
    resource: ResourceRef
    action: str
    outcome: DecisionOutcome
    decided_at: datetime
    source: str | None = None
