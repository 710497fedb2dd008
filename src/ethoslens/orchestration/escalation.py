"""Escalation policy - maps a violation set to a status and severity.

Rules are checked in order and the first match wins:
- no violations          -> approved / low
- any severity >= 9      -> blocked / critical
- any severity >= 7      -> pending / high
- otherwise              -> pending / medium
"""

from typing import Iterable, Tuple

from ethoslens.common.constants import EscalationConstants
from ethoslens.governance.schemas import (
    InteractionSeverity,
    InteractionStatus,
    Violation,
)


def escalate(violations: Iterable[Violation]) -> Tuple[InteractionStatus, InteractionSeverity]:
    severities = [v.severity for v in violations]
    
    if not severities:
        return InteractionStatus.APPROVED, InteractionSeverity.LOW
    if any(s >= EscalationConstants.BLOCK_SEVERITY for s in severities):
        return InteractionStatus.BLOCKED, InteractionSeverity.CRITICAL
    if any(s >= EscalationConstants.HIGH_SEVERITY for s in severities):
        return InteractionStatus.PENDING, InteractionSeverity.HIGH
    return InteractionStatus.PENDING, InteractionSeverity.MEDIUM
