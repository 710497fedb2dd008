"""Common utilities - logging, config, exceptions."""

from ethoslens.common.logging import get_logger
from ethoslens.common.config import Config, get_config, reset_config
from ethoslens.common.exceptions import (
    EthosLensException,
    ConfigurationError,
    PolicyCatalogError,
    RemoteError,
    RemoteHttpError,
    RemoteTimeoutError,
    RemoteParseError,
)

__all__ = [
    # Logging
    "get_logger",
    # Config
    "Config",
    "get_config",
    "reset_config",
    # Exceptions
    "EthosLensException",
    "ConfigurationError",
    "PolicyCatalogError",
    "RemoteError",
    "RemoteHttpError",
    "RemoteTimeoutError",
    "RemoteParseError",
]
