"""Decision recorder port - audit trail of authorization attempts."""

from typing import Protocol

from scopegate.domain.entities import AccessDecision


class DecisionRecorder(Protocol):
    """Port for recording every attempted action and its outcome."""

    async def record(self, decision: AccessDecision) -> None: ...
