"""Centralized constants for the governance pipeline."""


# ===== ESCALATION =====
class EscalationConstants:
    BLOCK_SEVERITY = 9.0
    HIGH_SEVERITY = 7.0


# ===== REMOTE TIER =====
class RemoteConstants:
    PROBE_TIMEOUT_SECONDS = 5.0
    ANALYSIS_TIMEOUT_SECONDS = 30.0
    TEMPERATURE = 0.1
    MAX_TOKENS = 1000
    GRAPH_HEADER = "x-graph-id"
    
    # Heuristic decoding of the remote answer
    CRITICAL_SEVERITY = 9.0
    FLAGGED_SEVERITY = 7.0
    PARSED_CONFIDENCE = 0.85
    DETAILS_MAX_CHARS = 200
    
    POLICY_FRAMEWORKS = ("GDPR", "EU AI Act", "FISMA", "DSA", "NIS2")


# ===== AGENT NAMES =====
class AgentNames:
    REMOTE_ERROR = "RemoteGovernance"
    REMOTE_COORDINATOR = "RemoteGovernanceCoordinator"
    LOCAL_ENFORCER = "LocalPolicyEnforcer"
    LOCAL_VERIFIER = "LocalPolicyEnforcer (Verification)"


# ===== LOGGING =====
class LoggingConstants:
    INPUT_PREVIEW_CHARS = 50
