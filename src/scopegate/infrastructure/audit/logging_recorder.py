"""Decision recorder that writes one structured log line per attempt."""

import json
import logging

from scopegate.domain.entities import AccessDecision

audit_logger = logging.getLogger("scopegate.audit")


def format_decision(decision: AccessDecision) -> str:
    """Serialize a decision as a compact JSON object."""
    return json.dumps(
        {
            "user_id": decision.user_id,
            "workspace_id": str(decision.workspace_id),
            "resource": str(decision.resource),
            "action": decision.action,
            "outcome": decision.outcome.value,
            "source": decision.source,
            "decided_at": decision.decided_at.isoformat(),
        },
        sort_keys=True,
    )


class LoggingDecisionRecorder:
    """Records access decisions to the scopegate.audit logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or audit_logger

    async def record(self, decision: AccessDecision) -> None:
        self._logger.info(format_decision(decision))
