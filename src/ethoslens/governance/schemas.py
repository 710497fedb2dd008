"""Governance schemas - type definitions for violations and interactions.

All records are frozen pydantic models. Attribute names are snake_case;
``model_dump(by_alias=True)`` yields the camelCase shape the chat front door
consumes.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ViolationType(str, Enum):
    """Policy categories a violation can belong to."""
    ILLEGAL_ACTIVITY = "illegal_activity"
    VIOLENCE = "violence"
    GDPR = "gdpr"
    COMPLIANCE = "compliance"
    MISINFORMATION = "misinformation"


class AgentActionType(str, Enum):
    """What an evaluation step did."""
    APPROVE = "approve"
    FLAG = "flag"
    BLOCK = "block"
    LOG = "log"
    ERROR = "error"


class InteractionStatus(str, Enum):
    """Delivery verdict for an interaction."""
    APPROVED = "approved"
    PENDING = "pending"
    BLOCKED = "blocked"


class InteractionSeverity(str, Enum):
    """Interaction-level severity derived from its violations."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Tier(str, Enum):
    """Evaluation tier."""
    REMOTE = "remote"
    LOCAL = "local"


class GovernanceModel(BaseModel):
    """Base for immutable governance records."""
    
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Violation(GovernanceModel):
    """A single detected policy breach.
    
    Severity is continuous; the thresholds at 7 and 9 drive escalation.
    """
    type: ViolationType = Field(
        ...,
        description="Policy category that was breached"
    )
    description: str = Field(
        ...,
        description="Short label for the finding"
    )
    reason: str = Field(
        ...,
        min_length=1,
        description="Human-readable reason shown when the exchange is held back"
    )
    severity: float = Field(
        ...,
        ge=0.0,
        le=10.0,
        description="Severity score from 0 to 10"
    )
    confidence: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Detector confidence from 0 to 1"
    )
    regulatory_framework: Optional[str] = Field(
        default=None,
        description="Regulation or standard the policy derives from"
    )


class AgentAction(GovernanceModel):
    """One audit trail entry. Insertion order is evaluation order."""
    agent_name: str = Field(
        ...,
        description="Evaluation step that produced the entry"
    )
    action: AgentActionType = Field(
        ...,
        description="What the step did"
    )
    details: str = Field(
        default="",
        description="Free-text detail"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the step finished"
    )


class Interaction(GovernanceModel):
    """One evaluated input/output exchange and its verdict.
    
    Built by the orchestrator through the ``with_*`` helpers, each of which
    returns a new value. Callers own what ``evaluate`` returns.
    """
    id: str = Field(
        default_factory=lambda: f"int_{uuid4().hex[:12]}",
        description="Unique interaction identifier"
    )
    input: str
    output: str
    timestamp: datetime = Field(default_factory=_utcnow)
    status: InteractionStatus = InteractionStatus.PENDING
    severity: InteractionSeverity = InteractionSeverity.LOW
    violations: Tuple[Violation, ...] = ()
    agent_actions: Tuple[AgentAction, ...] = ()
    
    @classmethod
    def create(cls, input: str, output: str) -> "Interaction":
        """Start a new interaction in pending/low with no findings."""
        return cls(input=input, output=output)
    
    @property
    def violation_types(self) -> set:
        return {v.type for v in self.violations}
    
    def with_violations(self, *violations: Violation) -> "Interaction":
        """Return new interaction with violations appended."""
        return self.model_copy(update={"violations": self.violations + tuple(violations)})
    
    def with_actions(self, *actions: AgentAction) -> "Interaction":
        """Return new interaction with agent actions appended."""
        return self.model_copy(update={"agent_actions": self.agent_actions + tuple(actions)})
    
    def with_verdict(
        self,
        status: InteractionStatus,
        severity: InteractionSeverity,
    ) -> "Interaction":
        """Return new interaction carrying the final verdict."""
        return self.model_copy(update={"status": status, "severity": severity})


class Verification(GovernanceModel):
    """Accuracy check reported alongside a remote analysis."""
    is_accurate: bool = True
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


class RemoteAnalysis(GovernanceModel):
    """Typed result of decoding one remote tier answer.
    
    ``status`` and ``severity`` are the remote tier's own suggestion; the
    orchestrator recomputes the verdict from the merged violations.
    """
    violations: Tuple[Violation, ...] = ()
    agent_actions: Tuple[AgentAction, ...] = ()
    status: InteractionStatus = InteractionStatus.APPROVED
    severity: InteractionSeverity = InteractionSeverity.LOW
    verification: Verification = Field(default_factory=Verification)


class TierStatus(GovernanceModel):
    """Which tier is effectively evaluating traffic."""
    using_remote: bool
    remote_available: bool
    active_tier: Tier


class FeedbackReceipt(GovernanceModel):
    """Outcome of forwarding user feedback on an interaction."""
    interaction_id: str
    feedback_processed: bool
    audit_log_created: bool = False
    raw: Dict[str, Any] = Field(default_factory=dict)
