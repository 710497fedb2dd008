"""Governance - schemas and the local policy tier.

Components:
- Schemas: Violation, AgentAction, Interaction and friends
- PatternDetector: regex safety net driven by policy_rules.yaml
"""

from ethoslens.governance.schemas import (
    AgentAction,
    AgentActionType,
    FeedbackReceipt,
    Interaction,
    InteractionSeverity,
    InteractionStatus,
    RemoteAnalysis,
    Tier,
    TierStatus,
    Verification,
    Violation,
    ViolationType,
)
from ethoslens.governance.policies import PatternDetector, PolicyCatalog, load_catalog

__all__ = [
    # Local tier
    "PatternDetector",
    "PolicyCatalog",
    "load_catalog",
    # Schemas
    "AgentAction",
    "AgentActionType",
    "FeedbackReceipt",
    "Interaction",
    "InteractionSeverity",
    "InteractionStatus",
    "RemoteAnalysis",
    "Tier",
    "TierStatus",
    "Verification",
    "Violation",
    "ViolationType",
]
