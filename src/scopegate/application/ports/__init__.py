"""Application ports - interfaces for external adapters."""

from scopegate.application.ports.access_reader import (
    HierarchyReader,
    MembershipReader,
    OverrideReader,
)
from scopegate.application.ports.decision_recorder import DecisionRecorder
from scopegate.application.ports.permission_checker import PermissionChecker
from scopegate.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "DecisionRecorder",
    "HierarchyReader",
    "MembershipReader",
    "OverrideReader",
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
