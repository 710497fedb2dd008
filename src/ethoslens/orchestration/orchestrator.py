"""Governance Orchestrator - the only place verdicts are produced.

Lifecycle of one evaluation:
1. Create the interaction (pending/low, no findings)
2. Attempt the remote tier if it is enabled and last known to be available
3. Run the local pattern tier, always
4. Merge, keeping the first violation of each type (remote first)
5. Apply the escalation policy and return the frozen interaction

Error Handling:
- Remote failures become an error agent action, never an exception
- The local tier runs whatever the remote tier did
"""

import logging
from typing import Any, Dict, Optional, Protocol

from ethoslens.common.config import Config, get_config
from ethoslens.common.constants import AgentNames
from ethoslens.common.logging import preview
from ethoslens.governance.policies import PatternDetector, load_catalog
from ethoslens.governance.schemas import (
    AgentAction,
    AgentActionType,
    FeedbackReceipt,
    Interaction,
    RemoteAnalysis,
    Tier,
    TierStatus,
)
from ethoslens.orchestration.escalation import escalate
from ethoslens.remote.client import RemoteGovernanceClient
from ethoslens.remote.probe import RemoteAvailabilityProbe


logger = logging.getLogger(__name__)


EMPTY_INSIGHTS: Dict[str, Any] = {
    "totalInteractions": 0,
    "totalViolations": 0,
    "blockedCount": 0,
    "approvalRate": "100%",
}


class RemoteAnalyzer(Protocol):
    """What the orchestrator needs from the remote tier."""
    
    def analyze(
        self,
        input: str,
        output: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> RemoteAnalysis: ...
    
    def get_insights(self, timeframe: str = "today") -> Dict[str, Any]: ...
    
    def submit_feedback(
        self,
        interaction_id: str,
        rating: str,
        comment: Optional[str] = None,
    ) -> FeedbackReceipt: ...


class GovernanceOrchestrator:
    """Two-tier governance evaluator.
    
    Construct one per hosting process and share it; evaluations do not
    share state beyond the probe's availability cache.
    """
    
    def __init__(
        self,
        config: Optional[Config] = None,
        detector: Optional[PatternDetector] = None,
        remote_client: Optional[RemoteAnalyzer] = None,
        probe: Optional[RemoteAvailabilityProbe] = None,
        use_remote: Optional[bool] = None,
        reprobe_interval_seconds: Optional[float] = None,
        probe_on_init: bool = True,
    ):
        """Initialize orchestrator.
        
        Args:
            config: Settings. Uses the environment configuration if not provided.
            detector: Local tier. Built from config.policy_file if not provided.
            remote_client: Remote tier. Built from config if not provided.
            probe: Availability probe. Built from config if not provided.
            use_remote: Remote tier enablement. Defaults to config.use_remote.
            reprobe_interval_seconds: Periodic re-probe interval. Defaults to config.
            probe_on_init: Probe eagerly when the remote tier starts enabled.
        """
        self.config = config or get_config()
        self.detector = detector or PatternDetector(load_catalog(self.config.policy_file))
        self.remote_client: RemoteAnalyzer = remote_client or RemoteGovernanceClient(
            base_url=self.config.remote_url,
            graph_identifier=self.config.graph_identifier,
            audit_graph_id=self.config.audit_graph_id,
            analysis_path=self.config.analysis_path,
            timeout=self.config.remote_timeout_seconds,
        )
        self.probe = probe or RemoteAvailabilityProbe(
            health_path=self.config.health_path,
            timeout=self.config.probe_timeout_seconds,
        )
        self.endpoint = self.config.remote_url
        self.reprobe_interval_seconds = (
            reprobe_interval_seconds
            if reprobe_interval_seconds is not None
            else self.config.reprobe_interval_seconds
        )
        self._use_remote = self.config.use_remote if use_remote is None else bool(use_remote)
        
        if self._use_remote and probe_on_init:
            self.probe.check(self.endpoint)
        
        logger.info(
            f"GovernanceOrchestrator ready (remote enabled: {self._use_remote}, "
            f"policy catalog v{self.detector.policy_version})"
        )
    
    @property
    def use_remote(self) -> bool:
        return self._use_remote
    
    def evaluate(
        self,
        input: str,
        output: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> Interaction:
        """Evaluate one input/output exchange.
        
        Args:
            input: The user's message
            output: The model's response
            context: Optional structured context forwarded to the remote tier
            
        Returns:
            Finalized Interaction. Never raises for remote tier failures.
        """
        interaction = Interaction.create(input, output)
        remote_succeeded = False
        
        if self._remote_active():
            interaction, remote_succeeded = self._run_remote(interaction, context)
        
        interaction = self._run_local(interaction, remote_succeeded)
        
        status, severity = escalate(interaction.violations)
        interaction = interaction.with_verdict(status, severity)
        
        logger.info(
            f"Interaction {interaction.id} finalized as {status.value}/{severity.value}",
            extra={
                "interaction_id": interaction.id,
                "violations": [v.type.value for v in interaction.violations],
                "remote_succeeded": remote_succeeded,
            },
        )
        return interaction
    
    def get_status(self) -> TierStatus:
        """Report enablement and a freshly probed availability."""
        if self._use_remote:
            self.probe.check(self.endpoint)
        available = self.probe.is_available(self.endpoint)
        return TierStatus(
            using_remote=self._use_remote,
            remote_available=available,
            active_tier=Tier.REMOTE if self._use_remote and available else Tier.LOCAL,
        )
    
    def switch_tier(self, use_remote: bool) -> None:
        """Enable or disable the remote tier; enabling re-probes immediately."""
        self._use_remote = bool(use_remote)
        logger.info(f"Remote tier {'enabled' if self._use_remote else 'disabled'}")
        if self._use_remote:
            self.probe.check(self.endpoint)
    
    def get_insights(self, timeframe: str = "today") -> Dict[str, Any]:
        """Aggregate insights from the remote tier, or an all-zero summary.
        
        The local tier keeps no history, so it has nothing to aggregate.
        """
        if not self._remote_active():
            return dict(EMPTY_INSIGHTS)
        try:
            return self.remote_client.get_insights(timeframe)
        except Exception as e:
            logger.warning(f"Remote insights unavailable: {type(e).__name__}: {e}")
            return dict(EMPTY_INSIGHTS)
    
    def submit_feedback(
        self,
        interaction_id: str,
        rating: str,
        comment: Optional[str] = None,
    ) -> FeedbackReceipt:
        """Forward feedback to the remote audit graph when the remote tier is active."""
        if not self._remote_active():
            return FeedbackReceipt(interaction_id=interaction_id, feedback_processed=False)
        try:
            return self.remote_client.submit_feedback(interaction_id, rating, comment)
        except Exception as e:
            logger.warning(f"Feedback for {interaction_id} not forwarded: {type(e).__name__}: {e}")
            return FeedbackReceipt(interaction_id=interaction_id, feedback_processed=False)
    
    def close(self) -> None:
        """Release HTTP clients held by the remote tier."""
        for component in (self.remote_client, self.probe):
            close = getattr(component, "close", None)
            if callable(close):
                close()
    
    def _remote_active(self) -> bool:
        if not self._use_remote:
            return False
        if self.probe.needs_recheck(self.endpoint, self.reprobe_interval_seconds):
            logger.debug("Cached availability is stale, re-probing remote tier")
            self.probe.check(self.endpoint)
        return self.probe.is_available(self.endpoint)
    
    def _run_remote(
        self,
        interaction: Interaction,
        context: Optional[Dict[str, Any]],
    ) -> tuple[Interaction, bool]:
        logger.info(f"Attempting remote analysis for: {preview(interaction.input)}")
        try:
            analysis = self.remote_client.analyze(interaction.input, interaction.output, context)
        except Exception as e:
            logger.warning(
                f"Remote tier error, falling back to local tier: {type(e).__name__}: {e}"
            )
            return interaction.with_actions(AgentAction(
                agent_name=AgentNames.REMOTE_ERROR,
                action=AgentActionType.ERROR,
                details=f"Remote governance error: {e}",
            )), False
        
        if not analysis.violations:
            # A clean remote verdict is not trusted on its own
            logger.info("Remote tier returned no violations, relying on local tier")
            return interaction, False
        
        logger.info(f"Remote tier found {len(analysis.violations)} violation(s)")
        interaction = interaction.with_violations(*analysis.violations)
        interaction = interaction.with_actions(*analysis.agent_actions)
        return interaction, True
    
    def _run_local(self, interaction: Interaction, remote_succeeded: bool) -> Interaction:
        local_violations = self.detector.detect(interaction.input, interaction.output)
        if not local_violations:
            return interaction
        
        present = interaction.violation_types
        for violation in local_violations:
            if violation.type not in present:
                interaction = interaction.with_violations(violation)
                present.add(violation.type)
        
        logger.info(f"Local tier found {len(local_violations)} violation(s)")
        return interaction.with_actions(AgentAction(
            agent_name=AgentNames.LOCAL_VERIFIER if remote_succeeded else AgentNames.LOCAL_ENFORCER,
            action=AgentActionType.BLOCK,
            details=f"Detected {len(local_violations)} violation(s)",
        ))
