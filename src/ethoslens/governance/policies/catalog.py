"""Policy Catalog - the declarative rule table behind the local tier.

The catalog is read from YAML once, validated with pydantic and compiled
into an immutable tuple of rules. Any problem here is a startup error.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from ethoslens.common.exceptions import PolicyCatalogError
from ethoslens.governance.schemas import Violation, ViolationType


logger = logging.getLogger(__name__)


DEFAULT_POLICY_FILE = Path(__file__).parent / "policy_rules.yaml"

# Unescaped .* or .+ between keywords
UNBOUNDED_GAP = re.compile(r"(?<!\\)\.[*+]")


class PolicyRecord(BaseModel):
    """One row of the catalog as written in YAML."""
    name: str
    category: ViolationType
    patterns: List[str] = Field(..., min_length=1)
    severity: float = Field(..., ge=0.0, le=10.0)
    confidence: float = Field(..., ge=0.0, le=1.0)
    regulatory_framework: Optional[str] = None
    description: str
    reason: str = Field(..., min_length=1)


class PolicyCatalogFile(BaseModel):
    """Parsed policy_rules.yaml."""
    
    class Metadata(BaseModel):
        version: str
        last_updated: str
        description: str = ""
    
    metadata: Metadata
    policies: List[PolicyRecord] = Field(..., min_length=1)


@dataclass(frozen=True)
class CompiledPolicy:
    """A catalog record with its patterns compiled."""
    name: str
    category: ViolationType
    patterns: Tuple[re.Pattern, ...]
    violation: Violation
    
    def matches(self, text: str) -> bool:
        return any(pattern.search(text) for pattern in self.patterns)


@dataclass(frozen=True)
class PolicyCatalog:
    """Ordered, immutable set of compiled policies."""
    version: str
    policies: Tuple[CompiledPolicy, ...]
    
    @property
    def categories(self) -> Tuple[ViolationType, ...]:
        seen: List[ViolationType] = []
        for policy in self.policies:
            if policy.category not in seen:
                seen.append(policy.category)
        return tuple(seen)
    
    @classmethod
    def from_records(cls, version: str, records: List[PolicyRecord], source: str = "<memory>") -> "PolicyCatalog":
        """Compile validated records.
        
        Raises:
            PolicyCatalogError: If a pattern is not a valid regular expression
                or has an unbounded .* or .+ gap
        """
        compiled = []
        for record in records:
            patterns = []
            for raw in record.patterns:
                if UNBOUNDED_GAP.search(raw):
                    raise PolicyCatalogError(
                        f"Unbounded gap in policy '{record.name}', use .{{0,N}}? instead",
                        source=source,
                        details={"policy": record.name, "pattern": raw},
                    )
                try:
                    patterns.append(re.compile(raw, re.IGNORECASE))
                except re.error as e:
                    raise PolicyCatalogError(
                        f"Invalid pattern in policy '{record.name}': {e}",
                        source=source,
                        details={"policy": record.name, "pattern": raw},
                    ) from e
            
            compiled.append(CompiledPolicy(
                name=record.name,
                category=record.category,
                patterns=tuple(patterns),
                violation=Violation(
                    type=record.category,
                    description=record.description,
                    reason=record.reason,
                    severity=record.severity,
                    confidence=record.confidence,
                    regulatory_framework=record.regulatory_framework,
                ),
            ))
        return cls(version=version, policies=tuple(compiled))


def load_catalog(policy_file: Optional[Union[str, Path]] = None) -> PolicyCatalog:
    """Load and compile the policy catalog.
    
    Args:
        policy_file: Path to a catalog YAML. Uses the packaged catalog if not provided.
        
    Returns:
        Compiled PolicyCatalog
        
    Raises:
        PolicyCatalogError: If the file is missing, malformed or has bad patterns
    """
    path = Path(policy_file) if policy_file else DEFAULT_POLICY_FILE
    source = str(path)
    
    if not path.exists():
        raise PolicyCatalogError(f"Policy file not found: {path}", source=source)
    
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise PolicyCatalogError(f"Policy file is not valid YAML: {e}", source=source) from e
    
    try:
        parsed = PolicyCatalogFile.model_validate(raw_config)
    except ValidationError as e:
        raise PolicyCatalogError(
            f"Policy file failed validation: {e.error_count()} error(s)",
            source=source,
            details={"errors": e.errors(include_url=False)},
        ) from e
    
    catalog = PolicyCatalog.from_records(parsed.metadata.version, parsed.policies, source=source)
    logger.info(
        f"Loaded policy catalog v{catalog.version} with {len(catalog.policies)} policies from {path.name}"
    )
    return catalog
