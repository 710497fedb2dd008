"""EthosLens - two-tier content governance for LLM chat traffic."""

__version__ = "0.1.0"
__author__ = "EthosLens Team"

# Core exports
from ethoslens.governance.schemas import AgentAction, Interaction, Violation
from ethoslens.governance.policies import PatternDetector
from ethoslens.orchestration import GovernanceOrchestrator

__all__ = [
    "AgentAction",
    "Interaction",
    "Violation",
    "PatternDetector",
    "GovernanceOrchestrator",
]
