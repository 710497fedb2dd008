"""Remote tier - availability probing and the governance graph client."""

from ethoslens.remote.client import RemoteGovernanceClient, build_analysis_request
from ethoslens.remote.parsing import decode_body, extract_content, parse_analysis
from ethoslens.remote.probe import AvailabilityState, RemoteAvailabilityProbe

__all__ = [
    "AvailabilityState",
    "RemoteAvailabilityProbe",
    "RemoteGovernanceClient",
    "build_analysis_request",
    "decode_body",
    "extract_content",
    "parse_analysis",
]
