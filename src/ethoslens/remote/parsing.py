"""Best-effort decoding of the remote tier's answer.

The remote graph replies in prose that is only loosely JSON. These are pure
functions from the raw response body to a typed RemoteAnalysis so that
nothing past the client boundary depends on the remote service's wording.
"""

import json
import re
from typing import Any, Dict, Optional

from ethoslens.common.constants import AgentNames, RemoteConstants
from ethoslens.common.exceptions import RemoteParseError
from ethoslens.governance.schemas import (
    AgentAction,
    AgentActionType,
    InteractionSeverity,
    InteractionStatus,
    RemoteAnalysis,
    Verification,
    Violation,
    ViolationType,
)


VIOLATION_KEYWORDS = re.compile(r"violation|blocked", re.IGNORECASE)
CRITICAL_KEYWORD = re.compile(r"critical", re.IGNORECASE)
MISINFORMATION_KEYWORD = re.compile(r"misinformation", re.IGNORECASE)

DEFAULT_REASON = "Remote governance analysis"
VIOLATION_DESCRIPTION = "Detected by remote governance graph"


def decode_body(body: str) -> Dict[str, Any]:
    """Parse a response body into a JSON object.
    
    Raises:
        RemoteParseError: If the body is not JSON or not an object
    """
    try:
        payload = json.loads(body)
    except ValueError as e:
        raise RemoteParseError(
            "Remote response is not valid JSON",
            details={"body": body[:RemoteConstants.DETAILS_MAX_CHARS]},
        ) from e
    
    if not isinstance(payload, dict):
        raise RemoteParseError(
            f"Remote response must be a JSON object, got {type(payload).__name__}",
        )
    return payload


def extract_content(payload: Dict[str, Any]) -> str:
    """Pull the free-text answer out of a response object.
    
    Accepts ``content``, ``message`` (string or ``{"content": ...}``) or an
    OpenAI-style ``choices[0].message.content``. Returns "" when none is present.
    """
    content = payload.get("content")
    if isinstance(content, str) and content:
        return content
    
    message = payload.get("message")
    if isinstance(message, str) and message:
        return message
    if isinstance(message, dict) and isinstance(message.get("content"), str):
        return message["content"]
    
    choices = payload.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        choice_message = choices[0].get("message")
        if isinstance(choice_message, dict) and isinstance(choice_message.get("content"), str):
            return choice_message["content"]
    
    return ""


def extract_reason(content: str) -> Optional[str]:
    """Return the ``reason`` of a JSON object embedded in the content, if any."""
    start = content.find("{")
    end = content.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        embedded = json.loads(content[start:end + 1])
    except ValueError:
        return None
    if isinstance(embedded, dict):
        reason = embedded.get("reason")
        if isinstance(reason, str) and reason.strip():
            return reason.strip()
    return None


def truncate(text: str, limit: int = RemoteConstants.DETAILS_MAX_CHARS) -> str:
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."


def parse_analysis(payload: Dict[str, Any]) -> RemoteAnalysis:
    """Turn a decoded response object into violations and agent actions.
    
    A "violation" or "blocked" keyword yields one compliance violation, with
    severity 9 when "critical" also appears and 7 otherwise. The coordinator's
    decision is always recorded as one agent action.
    """
    content = extract_content(payload)
    has_violation = bool(VIOLATION_KEYWORDS.search(content))
    is_critical = bool(CRITICAL_KEYWORD.search(content))
    
    violations = ()
    if has_violation:
        violations = (Violation(
            type=ViolationType.COMPLIANCE,
            description=VIOLATION_DESCRIPTION,
            reason=extract_reason(content) or DEFAULT_REASON,
            severity=(
                RemoteConstants.CRITICAL_SEVERITY if is_critical
                else RemoteConstants.FLAGGED_SEVERITY
            ),
            confidence=RemoteConstants.PARSED_CONFIDENCE,
        ),)
    
    action = AgentAction(
        agent_name=AgentNames.REMOTE_COORDINATOR,
        action=AgentActionType.FLAG if has_violation else AgentActionType.APPROVE,
        details=truncate(content),
    )
    
    if not has_violation:
        status, severity = InteractionStatus.APPROVED, InteractionSeverity.LOW
    elif is_critical:
        status, severity = InteractionStatus.BLOCKED, InteractionSeverity.CRITICAL
    else:
        status, severity = InteractionStatus.PENDING, InteractionSeverity.HIGH
    
    return RemoteAnalysis(
        violations=violations,
        agent_actions=(action,),
        status=status,
        severity=severity,
        verification=Verification(
            is_accurate=not MISINFORMATION_KEYWORD.search(content),
            confidence=RemoteConstants.PARSED_CONFIDENCE,
        ),
    )
