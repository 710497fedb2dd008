"""Policies module - the local tier.

Provides deterministic pattern detection with zero network access.
"""

from ethoslens.governance.policies.catalog import (
    DEFAULT_POLICY_FILE,
    CompiledPolicy,
    PolicyCatalog,
    PolicyRecord,
    load_catalog,
)
from ethoslens.governance.policies.detector import PatternDetector

__all__ = [
    "DEFAULT_POLICY_FILE",
    "CompiledPolicy",
    "PolicyCatalog",
    "PolicyRecord",
    "PatternDetector",
    "load_catalog",
]
