"""Unit tests for RemoteGovernanceClient.

The network is replaced by httpx.MockTransport; each test inspects the
outgoing request or shapes the response.
"""

import json

import httpx
import pytest

from ethoslens.common.exceptions import (
    RemoteError,
    RemoteHttpError,
    RemoteParseError,
    RemoteTimeoutError,
)
from ethoslens.governance.schemas import ViolationType
from ethoslens.remote.client import RemoteGovernanceClient, build_analysis_request


GRAPH = "default/ethoslens/governance-graph-advanced"


def make_client(handler, **kwargs) -> RemoteGovernanceClient:
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return RemoteGovernanceClient(
        base_url="http://remote.test",
        graph_identifier=GRAPH,
        http_client=http_client,
        **kwargs,
    )


def answer(content: str) -> httpx.Response:
    return httpx.Response(200, json={"content": content})


class TestBuildAnalysisRequest:
    """Test the analysis request body."""
    
    def test_shape(self):
        body = build_analysis_request(GRAPH, "hello", "hi there")
        
        assert body["model"] == GRAPH
        assert body["temperature"] == 0.1
        assert body["max_tokens"] == 1000
        assert [m["role"] for m in body["messages"]] == ["system", "user"]
    
    def test_prompt_carries_exchange(self):
        body = build_analysis_request(GRAPH, "user text", "model text")
        user_message = body["messages"][1]["content"]
        
        assert 'INPUT: "user text"' in user_message
        assert 'OUTPUT: "model text"' in user_message
        assert "CONTEXT" not in user_message
    
    def test_context_included(self):
        body = build_analysis_request(GRAPH, "a", "b", context={"channel": "support"})
        assert 'CONTEXT: {"channel": "support"}' in body["messages"][1]["content"]
    
    def test_system_instruction_names_frameworks(self):
        body = build_analysis_request(GRAPH, "a", "b")
        system = body["messages"][0]["content"]
        
        assert "GDPR" in system
        assert '"status": "BLOCKED"' in system


class TestAnalyze:
    """Test the analysis call."""
    
    def test_request_sent_to_graph(self):
        seen = []
        
        def handler(request):
            seen.append(request)
            return answer("Looks fine")
        
        client = make_client(handler)
        client.analyze("hello", "hi")
        
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "http://remote.test/v1/chat/completions"
        assert request.headers["x-graph-id"] == GRAPH
        assert json.loads(request.content)["model"] == GRAPH
    
    def test_custom_analysis_path(self):
        seen = []
        
        def handler(request):
            seen.append(request)
            return answer("ok")
        
        client = make_client(handler, analysis_path="graphs/analyze")
        client.analyze("a", "b")
        assert seen[0].url.path == "/graphs/analyze"
    
    def test_violation_parsed(self):
        client = make_client(lambda request: answer("BLOCKED: critical security violation"))
        analysis = client.analyze("hack wifi", "sure")
        
        assert len(analysis.violations) == 1
        assert analysis.violations[0].type == ViolationType.COMPLIANCE
        assert analysis.violations[0].severity == 9.0
    
    def test_clean_answer(self):
        client = make_client(lambda request: answer("Approved"))
        assert client.analyze("hello", "hi").violations == ()
    
    def test_http_error(self):
        client = make_client(lambda request: httpx.Response(503, text="overloaded"))
        
        with pytest.raises(RemoteHttpError) as exc_info:
            client.analyze("a", "b")
        
        error = exc_info.value
        assert error.status_code == 503
        assert error.body == "overloaded"
        assert "503" in error.message
        assert "overloaded" in error.message
    
    def test_non_json_body(self):
        client = make_client(lambda request: httpx.Response(200, text="<html>ok</html>"))
        
        with pytest.raises(RemoteParseError):
            client.analyze("a", "b")
    
    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)
        
        client = make_client(handler, timeout=2.5)
        
        with pytest.raises(RemoteTimeoutError) as exc_info:
            client.analyze("a", "b")
        assert exc_info.value.details["timeout_seconds"] == 2.5
    
    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)
        
        client = make_client(handler)
        
        with pytest.raises(RemoteError) as exc_info:
            client.analyze("a", "b")
        assert "ConnectError" in exc_info.value.message
    
    def test_errors_share_base(self):
        for exc_type in (RemoteHttpError, RemoteTimeoutError, RemoteParseError):
            assert issubclass(exc_type, RemoteError)


class TestAuditGraph:
    """Test insights and feedback calls."""
    
    def test_insights(self):
        seen = []
        
        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"totalInteractions": 12})
        
        client = make_client(handler)
        insights = client.get_insights("this week")
        
        body = json.loads(seen[0].content)
        assert seen[0].url.path == "/conversations"
        assert body["graphId"] == "compliance-audit-graph"
        assert "this week" in body["message"]
        assert insights == {"raw": {"totalInteractions": 12}}
    
    def test_feedback(self):
        seen = []
        
        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"ok": True})
        
        client = make_client(handler, audit_graph_id="audit")
        receipt = client.submit_feedback("int_abc", "false_positive", "Not harmful")
        
        body = json.loads(seen[0].content)
        assert body["graphId"] == "audit"
        assert "int_abc" in body["message"]
        assert "Comment: Not harmful" in body["message"]
        assert receipt.feedback_processed is True
        assert receipt.audit_log_created is True
        assert receipt.raw == {"ok": True}
    
    def test_feedback_error_propagates(self):
        client = make_client(lambda request: httpx.Response(500, text="boom"))
        
        with pytest.raises(RemoteHttpError):
            client.submit_feedback("int_abc", "helpful")


class TestClose:
    """Test client ownership."""
    
    def test_injected_client_left_open(self):
        http_client = httpx.Client(transport=httpx.MockTransport(lambda r: answer("ok")))
        client = RemoteGovernanceClient("http://remote.test", GRAPH, http_client=http_client)
        
        client.close()
        assert not http_client.is_closed
    
    def test_base_url_trailing_slash(self):
        client = RemoteGovernanceClient("http://remote.test/", GRAPH)
        assert client.base_url == "http://remote.test"
        client.close()
