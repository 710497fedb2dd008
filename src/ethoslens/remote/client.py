"""Remote Governance Client - one call to the graph-based reasoning service.

Failures raise RemoteError subclasses; callers decide how to degrade.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from ethoslens.common.constants import RemoteConstants
from ethoslens.common.exceptions import (
    RemoteError,
    RemoteHttpError,
    RemoteTimeoutError,
)
from ethoslens.common.logging import preview
from ethoslens.governance.schemas import FeedbackReceipt, RemoteAnalysis
from ethoslens.remote.parsing import decode_body, parse_analysis


logger = logging.getLogger(__name__)


SYSTEM_INSTRUCTION = """You are an AI Governance expert. Analyze the following AI interaction for policy violations across {frameworks}, and other regulatory frameworks.

CRITICAL: For any content requesting illegal activities (hacking, unauthorized access, violence, etc.), you MUST respond with:
{{
  "status": "BLOCKED",
  "severity": "CRITICAL",
  "violations": [list of violations],
  "reason": "specific reason"
}}

Be very strict about security and safety violations."""

USER_TEMPLATE = """Analyze this interaction:

INPUT: "{input}"
OUTPUT: "{output}"
{context}
Provide a JSON response with:
1. status: "APPROVED", "FLAGGED", or "BLOCKED"
2. severity: "LOW", "MEDIUM", "HIGH", or "CRITICAL"
3. violations: array of detected violations
4. reason: explanation"""


def build_analysis_request(
    graph_identifier: str,
    input: str,
    output: str,
    context: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build the JSON body of an analysis call."""
    context_line = f"CONTEXT: {json.dumps(context, default=str)}\n" if context else ""
    frameworks = ", ".join(RemoteConstants.POLICY_FRAMEWORKS)
    return {
        "model": graph_identifier,
        "messages": [
            {
                "role": "system",
                "content": SYSTEM_INSTRUCTION.format(frameworks=frameworks),
            },
            {
                "role": "user",
                "content": USER_TEMPLATE.format(
                    input=input, output=output, context=context_line
                ),
            },
        ],
        "temperature": RemoteConstants.TEMPERATURE,
        "max_tokens": RemoteConstants.MAX_TOKENS,
    }


class RemoteGovernanceClient:
    """Client for the remote governance graph.
    
    Sends one exchange per call and decodes the answer into typed
    violations and agent actions. Also reaches the audit graph for
    insights and feedback.
    """
    
    def __init__(
        self,
        base_url: str,
        graph_identifier: str,
        audit_graph_id: str = "compliance-audit-graph",
        analysis_path: str = "/v1/chat/completions",
        timeout: float = RemoteConstants.ANALYSIS_TIMEOUT_SECONDS,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Args:
            base_url: Base URL of the remote service (e.g. "http://localhost:3003")
            graph_identifier: Analysis graph as "tenant/project/graph"
            audit_graph_id: Graph that serves insights and feedback
            analysis_path: Path of the analysis endpoint
            timeout: HTTP request timeout in seconds
            http_client: Custom httpx client. Creates one if not provided.
        """
        self.base_url = base_url.rstrip("/")
        self.graph_identifier = graph_identifier
        self.audit_graph_id = audit_graph_id
        self.analysis_path = analysis_path if analysis_path.startswith("/") else f"/{analysis_path}"
        self.timeout = timeout
        self._client = http_client or httpx.Client()
        self._owns_client = http_client is None
    
    def analyze(
        self,
        input: str,
        output: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> RemoteAnalysis:
        """Ask the remote graph to analyze one exchange.
        
        Returns:
            RemoteAnalysis with zero or one synthesized violation.
            
        Raises:
            RemoteHttpError: Non-success status
            RemoteTimeoutError: No answer within the timeout
            RemoteParseError: Body is not a JSON object
            RemoteError: Any other transport failure
        """
        logger.info(f"Requesting remote analysis for: {preview(input)}")
        body = self._post(
            self.analysis_path,
            build_analysis_request(self.graph_identifier, input, output, context),
            headers={RemoteConstants.GRAPH_HEADER: self.graph_identifier},
        )
        analysis = parse_analysis(decode_body(body))
        logger.info(
            f"Remote analysis returned {len(analysis.violations)} violation(s)",
            extra={"graph": self.graph_identifier},
        )
        return analysis
    
    def get_insights(self, timeframe: str = "today") -> Dict[str, Any]:
        """Ask the audit graph for aggregate governance insights."""
        body = self._post("/conversations", {
            "graphId": self.audit_graph_id,
            "message": f"Provide governance insights for {timeframe}.",
        })
        return {"raw": decode_body(body)}
    
    def submit_feedback(
        self,
        interaction_id: str,
        rating: str,
        comment: Optional[str] = None,
    ) -> FeedbackReceipt:
        """Forward user feedback on an interaction to the audit graph."""
        message = (
            f"Please process user feedback for interaction {interaction_id}:\n"
            f"Type: {rating}\n"
        )
        if comment:
            message += f"Comment: {comment}"
        body = self._post("/conversations", {
            "graphId": self.audit_graph_id,
            "message": message,
        })
        return FeedbackReceipt(
            interaction_id=interaction_id,
            feedback_processed=True,
            audit_log_created=True,
            raw=decode_body(body),
        )
    
    def close(self) -> None:
        if self._owns_client:
            self._client.close()
    
    def _post(
        self,
        path: str,
        payload: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None,
    ) -> str:
        url = f"{self.base_url}{path}"
        try:
            response = self._client.post(
                url, json=payload, headers=headers, timeout=self.timeout
            )
        except httpx.TimeoutException as e:
            raise RemoteTimeoutError(
                f"Remote governance call timed out after {self.timeout}s",
                timeout=self.timeout,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise RemoteError(
                f"Remote governance call failed: {type(e).__name__}: {e}",
                details={"url": url},
            ) from e
        
        if not response.is_success:
            raise RemoteHttpError(response.status_code, response.text)
        return response.text
