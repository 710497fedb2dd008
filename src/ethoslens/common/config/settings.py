"""Configuration management - Centralized configuration for EthosLens.

Provides environment-aware configuration with sensible defaults.
All configuration is loaded from environment variables with fallbacks.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from ethoslens.common.constants import RemoteConstants
from ethoslens.common.exceptions import ConfigurationError


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{name} must be a number, got {raw!r}",
            details={"variable": name},
        ) from e


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    return Path(raw) if raw else None


@dataclass
class Config:
    """Central configuration object for EthosLens.
    
    All settings can be overridden via environment variables prefixed with ETHOS_.
    
    Example:
        ETHOS_REMOTE_URL=http://localhost:3003
        ETHOS_USE_REMOTE=true
        ETHOS_REPROBE_INTERVAL_SECONDS=60
    """
    
    # Core settings
    environment: Environment = field(
        default_factory=lambda: Environment(
            os.getenv("ETHOS_ENVIRONMENT", "development")
        )
    )
    log_level: LogLevel = field(
        default_factory=lambda: LogLevel(os.getenv("ETHOS_LOG_LEVEL", "INFO").upper())
    )
    
    # Remote tier
    remote_url: str = field(
        default_factory=lambda: os.getenv("ETHOS_REMOTE_URL", "http://localhost:3003")
    )
    use_remote: bool = field(
        default_factory=lambda: _env_flag("ETHOS_USE_REMOTE")
    )
    tenant_id: str = field(
        default_factory=lambda: os.getenv("ETHOS_TENANT_ID", "default")
    )
    project_id: str = field(
        default_factory=lambda: os.getenv("ETHOS_PROJECT_ID", "ethoslens")
    )
    graph_id: str = field(
        default_factory=lambda: os.getenv("ETHOS_GRAPH_ID", "governance-graph-advanced")
    )
    audit_graph_id: str = field(
        default_factory=lambda: os.getenv("ETHOS_AUDIT_GRAPH_ID", "compliance-audit-graph")
    )
    analysis_path: str = field(
        default_factory=lambda: os.getenv("ETHOS_ANALYSIS_PATH", "/v1/chat/completions")
    )
    health_path: str = field(
        default_factory=lambda: os.getenv("ETHOS_HEALTH_PATH", "/health")
    )
    probe_timeout_seconds: float = field(
        default_factory=lambda: _env_float(
            "ETHOS_PROBE_TIMEOUT_SECONDS", RemoteConstants.PROBE_TIMEOUT_SECONDS
        )
    )
    remote_timeout_seconds: float = field(
        default_factory=lambda: _env_float(
            "ETHOS_REMOTE_TIMEOUT_SECONDS", RemoteConstants.ANALYSIS_TIMEOUT_SECONDS
        )
    )
    # None keeps the cached availability until an explicit re-check
    reprobe_interval_seconds: Optional[float] = field(
        default_factory=lambda: _env_float("ETHOS_REPROBE_INTERVAL_SECONDS", None)
    )
    
    # Local tier
    policy_file: Optional[Path] = field(
        default_factory=lambda: _env_path("ETHOS_POLICY_FILE")
    )
    
    def __post_init__(self):
        """Validate configuration after initialization."""
        parsed = urlparse(self.remote_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(
                f"ETHOS_REMOTE_URL must be an http(s) URL, got {self.remote_url!r}",
                details={"variable": "ETHOS_REMOTE_URL"},
            )
        self.remote_url = self.remote_url.rstrip("/")
        
        for name in ("probe_timeout_seconds", "remote_timeout_seconds"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(
                    f"{name} must be positive",
                    details={"field": name},
                )
        
        if self.reprobe_interval_seconds is not None and self.reprobe_interval_seconds <= 0:
            raise ConfigurationError(
                "reprobe_interval_seconds must be positive when set",
                details={"field": "reprobe_interval_seconds"},
            )
    
    @property
    def graph_identifier(self) -> str:
        """Identifier of the analysis graph as tenant/project/graph."""
        return f"{self.tenant_id}/{self.project_id}/{self.graph_id}"


# Process-wide default, used when no Config is injected
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance.
    
    Returns:
        Config: The global configuration singleton.
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
