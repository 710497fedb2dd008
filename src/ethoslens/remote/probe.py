"""Remote Availability Probe - decides whether the remote tier is usable.

Availability is advisory: every failure mode resolves to ``False`` and is
cached like any other result. The cache holds one immutable
AvailabilityState per endpoint and is swapped under a lock; the lock is
never held while the health request is in flight.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import httpx

from ethoslens.common.constants import RemoteConstants


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AvailabilityState:
    """Last known availability of one remote endpoint."""
    available: bool = False
    last_checked_at: Optional[datetime] = None
    
    def is_stale(self, interval_seconds: float, now: Optional[datetime] = None) -> bool:
        """True if never checked or checked more than interval_seconds ago."""
        if self.last_checked_at is None:
            return True
        now = now or datetime.now(timezone.utc)
        return now - self.last_checked_at >= timedelta(seconds=interval_seconds)


class RemoteAvailabilityProbe:
    """Health-check client with timeout and per-endpoint caching."""
    
    def __init__(
        self,
        health_path: str = "/health",
        timeout: float = RemoteConstants.PROBE_TIMEOUT_SECONDS,
        http_client: Optional[httpx.Client] = None,
    ):
        """Initialize probe.
        
        Args:
            health_path: Path appended to the endpoint for the health check
            timeout: Seconds after which the probe resolves False
            http_client: Custom httpx client. Creates one if not provided.
        """
        self.health_path = health_path if health_path.startswith("/") else f"/{health_path}"
        self.timeout = timeout
        self._client = http_client or httpx.Client()
        self._owns_client = http_client is None
        
        self._lock = threading.Lock()
        self._states: Dict[str, AvailabilityState] = {}
    
    def check(self, endpoint: str) -> bool:
        """Probe the endpoint now and cache the result.
        
        Args:
            endpoint: Base URL of the remote service
            
        Returns:
            True if the health path answered with a 2xx status in time.
            Never raises.
        """
        available = self._probe(endpoint)
        state = AvailabilityState(
            available=available,
            last_checked_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._states[self._key(endpoint)] = state
        return available
    
    def state(self, endpoint: str) -> AvailabilityState:
        """Read the cached state without probing."""
        with self._lock:
            return self._states.get(self._key(endpoint), AvailabilityState())
    
    def is_available(self, endpoint: str) -> bool:
        """Last known availability; False if never probed."""
        return self.state(endpoint).available
    
    def needs_recheck(self, endpoint: str, interval_seconds: Optional[float]) -> bool:
        """Whether a periodic re-probe is due. Never due without an interval."""
        if interval_seconds is None:
            return False
        return self.state(endpoint).is_stale(interval_seconds)
    
    def close(self) -> None:
        if self._owns_client:
            self._client.close()
    
    def _probe(self, endpoint: str) -> bool:
        url = self._health_url(endpoint)
        if url is None:
            logger.warning(f"Health check skipped, malformed endpoint: {endpoint!r}")
            return False
        
        logger.debug(f"Checking remote availability at {url}")
        try:
            response = self._client.get(url, timeout=self.timeout)
        except httpx.TimeoutException:
            logger.warning(f"Health check timed out after {self.timeout}s: {url}")
            return False
        except httpx.HTTPError as e:
            logger.warning(f"Health check error: {type(e).__name__}: {e}")
            return False
        
        # 204 No Content is the usual answer
        available = response.is_success
        logger.info(
            f"Health check response: {response.status_code}, available: {available}",
            extra={"endpoint": endpoint},
        )
        return available
    
    def _health_url(self, endpoint: str) -> Optional[httpx.URL]:
        try:
            url = httpx.URL(f"{endpoint.rstrip('/')}{self.health_path}")
        except (httpx.InvalidURL, TypeError, ValueError):
            return None
        if url.scheme not in ("http", "https") or not url.host:
            return None
        return url
    
    @staticmethod
    def _key(endpoint: str) -> str:
        return endpoint.rstrip("/")
