"""Orchestration - tier selection, merge and escalation.

Components:
- GovernanceOrchestrator: evaluate, get_status, switch_tier, get_insights
- escalate: violation set -> (status, severity)
"""

from ethoslens.orchestration.escalation import escalate
from ethoslens.orchestration.orchestrator import (
    EMPTY_INSIGHTS,
    GovernanceOrchestrator,
    RemoteAnalyzer,
)

__all__ = [
    "EMPTY_INSIGHTS",
    "GovernanceOrchestrator",
    "RemoteAnalyzer",
    "escalate",
]
