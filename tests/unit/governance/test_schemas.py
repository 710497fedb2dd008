"""Unit tests for governance schemas."""

import pytest
from pydantic import ValidationError

from ethoslens.governance.schemas import (
    AgentAction,
    AgentActionType,
    Interaction,
    InteractionSeverity,
    InteractionStatus,
    Violation,
    ViolationType,
)


@pytest.fixture
def violation():
    return Violation(
        type=ViolationType.GDPR,
        description="Personal information request detected",
        reason="Content requests private personal information",
        severity=8.5,
        confidence=0.9,
        regulatory_framework="GDPR",
    )


class TestViolation:
    """Test Violation validation."""
    
    def test_is_immutable(self, violation):
        with pytest.raises(ValidationError):
            violation.severity = 1.0
    
    @pytest.mark.parametrize("field,value", [
        ("severity", 10.5),
        ("severity", -1.0),
        ("confidence", 1.2),
    ])
    def test_bounds(self, field, value):
        data = {
            "type": "violence",
            "description": "d",
            "reason": "r",
            "severity": 5.0,
            "confidence": 0.5,
        }
        data[field] = value
        with pytest.raises(ValidationError):
            Violation(**data)
    
    def test_reason_required(self):
        with pytest.raises(ValidationError):
            Violation(type="violence", description="d", reason="", severity=5.0, confidence=0.5)
    
    def test_camel_case_serialization(self, violation):
        data = violation.model_dump(mode="json", by_alias=True)
        assert data["regulatoryFramework"] == "GDPR"
        assert data["type"] == "gdpr"


class TestInteraction:
    """Test the copy-on-write interaction helpers."""
    
    def test_create_defaults(self):
        interaction = Interaction.create("hello", "hi")
        
        assert interaction.id.startswith("int_")
        assert interaction.status == InteractionStatus.PENDING
        assert interaction.severity == InteractionSeverity.LOW
        assert interaction.violations == ()
        assert interaction.agent_actions == ()
    
    def test_ids_are_unique(self):
        assert Interaction.create("a", "b").id != Interaction.create("a", "b").id
    
    def test_with_helpers_return_new_values(self, violation):
        original = Interaction.create("hello", "hi")
        action = AgentAction(agent_name="Test", action=AgentActionType.LOG, details="x")
        
        updated = original.with_violations(violation).with_actions(action)
        
        assert original.violations == ()
        assert original.agent_actions == ()
        assert updated.violations == (violation,)
        assert updated.agent_actions == (action,)
        assert updated.id == original.id
    
    def test_is_immutable(self):
        interaction = Interaction.create("a", "b")
        with pytest.raises(ValidationError):
            interaction.status = InteractionStatus.BLOCKED
    
    def test_camel_case_serialization(self):
        action = AgentAction(agent_name="Test", action=AgentActionType.APPROVE)
        data = Interaction.create("a", "b").with_actions(action).model_dump(mode="json", by_alias=True)
        
        assert "agentActions" in data
        assert data["agentActions"][0]["agentName"] == "Test"
        assert data["status"] == "pending"
