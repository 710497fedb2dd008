"""Pattern Detector - the always-on local governance tier."""

from typing import List, Optional

from ethoslens.governance.policies.catalog import PolicyCatalog, load_catalog
from ethoslens.governance.schemas import Violation, ViolationType


class PatternDetector:
    """Deterministic regex detector over the policy catalog.
    
    Scans ``"<input> <output>"``. Policies are checked in catalog order and
    each category contributes at most one violation, taken from its first
    matching policy. Categories are independent of each other.
    """
    
    def __init__(self, catalog: Optional[PolicyCatalog] = None):
        """Initialize detector.
        
        Args:
            catalog: Compiled catalog. Loads the packaged catalog if not provided.
        """
        self.catalog = catalog or load_catalog()
    
    @property
    def policy_version(self) -> str:
        return self.catalog.version
    
    def detect(self, input: str, output: str) -> List[Violation]:
        """Return violations for one exchange, in catalog order."""
        text = f"{input} {output}"
        violations: List[Violation] = []
        matched: set[ViolationType] = set()
        
        for policy in self.catalog.policies:
            if policy.category in matched:
                continue
            if policy.matches(text):
                violations.append(policy.violation)
                matched.add(policy.category)
        
        return violations
