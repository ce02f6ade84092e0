"""Domain entities."""

from scopegate.domain.entities.access_decision import AccessDecision, DecisionOutcome
from scopegate.domain.entities.scope_override import ScopeOverride

__all__ = [
    "AccessDecision",
    "DecisionOutcome",
    "ScopeOverride",
]
