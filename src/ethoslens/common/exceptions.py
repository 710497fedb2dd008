"""Custom exceptions for EthosLens.

All EthosLens exceptions inherit from EthosLensException. Remote tier
failures share the RemoteError base so the orchestrator can degrade them
into recorded agent actions; catalog errors are ConfigurationErrors and are
fatal at startup.
"""

from typing import Any, Dict, Optional


class EthosLensException(Exception):
    """Base exception for all EthosLens errors.
    
    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
        details: Additional context about the error
    """
    
    def __init__(
        self,
        message: str,
        code: str = "ETHOSLENS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(EthosLensException):
    """Raised when configuration is invalid or missing."""
    
    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        code: str = "CONFIG_ERROR",
    ):
        super().__init__(message, code=code, details=details)


class PolicyCatalogError(ConfigurationError):
    """Raised when the policy catalog cannot be loaded or compiled."""
    
    def __init__(
        self,
        message: str,
        source: str,
        details: Optional[Dict[str, Any]] = None
    ):
        details = details or {}
        details["source"] = source
        super().__init__(message, details=details, code="POLICY_CATALOG_ERROR")


class RemoteError(EthosLensException):
    """Raised when the remote governance tier fails."""
    
    def __init__(
        self,
        message: str,
        code: str = "REMOTE_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code=code, details=details)


class RemoteHttpError(RemoteError):
    """Raised when the remote tier answers with a non-success status."""
    
    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"Remote governance API error: {status_code} - {body}",
            code="REMOTE_HTTP_ERROR",
            details={"status_code": status_code, "body": body},
        )


class RemoteTimeoutError(RemoteError):
    """Raised when a remote call exceeds its timeout."""
    
    def __init__(self, message: str, timeout: float):
        super().__init__(
            message,
            code="REMOTE_TIMEOUT",
            details={"timeout_seconds": timeout},
        )


class RemoteParseError(RemoteError):
    """Raised when the remote response has an unexpected shape."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="REMOTE_PARSE_ERROR", details=details)
