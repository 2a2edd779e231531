import asyncio
import httpx
import logging
from typing import Any, List, Optional, Type
from pydantic import BaseModel, ValidationError

from app.core.config import get_settings
from app.core.metrics import network_fetch_total
from app.exceptions import NetworkFeedException, MalformedFeedException
from app.models.flight import Network
from app.schemas.network import NetworkSnapshotEntry

logger = logging.getLogger(__name__)
settings = get_settings()


class NetworkFeedClient:
    """
    Base client for a flight-tracking network's public data feed.

    Subclasses set `network` and `feed_model` (a pydantic decoder exposing
    `snapshot()`). One GET per call, no retries: a failed fetch is simply
    retried on the next scheduled cycle.
    """

    network: Network
    feed_model: Type[BaseModel]

    def __init__(
        self,
        url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.url = url
        self.timeout = timeout if timeout is not None else settings.NETWORK_FETCH_TIMEOUT_SECONDS
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Initialize HTTP client on context enter"""
        self._http_client = httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            headers={"User-Agent": settings.NETWORK_USER_AGENT, "Accept": "application/json"},
            follow_redirects=True
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Close HTTP client on context exit"""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def _get_json(self) -> Any:
        if self._http_client is None:
            raise RuntimeError(f"{type(self).__name__} used outside of 'async with'")

        try:
            # httpx timeouts apply per read; bound the whole request as well
            response = await asyncio.wait_for(self._http_client.get(self.url), timeout=self.timeout)
            response.raise_for_status()
        except (httpx.TimeoutException, asyncio.TimeoutError):
            network_fetch_total.labels(network=self.network.value, status="timeout").inc()
            logger.error(f"{self.network.value} feed timed out after {self.timeout}s")
            raise NetworkFeedException(self.network.value, f"timeout after {self.timeout}s")
        except httpx.HTTPStatusError as e:
            network_fetch_total.labels(network=self.network.value, status="http_error").inc()
            logger.error(
                f"HTTP error on {self.network.value} feed: {e.response.status_code}",
                extra={"url": self.url}
            )
            raise NetworkFeedException(self.network.value, f"HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            network_fetch_total.labels(network=self.network.value, status="transport_error").inc()
            logger.error(f"Error fetching {self.network.value} feed: {str(e)}")
            raise NetworkFeedException(self.network.value, f"request error: {e}")

        try:
            return response.json()
        except ValueError as e:
            network_fetch_total.labels(network=self.network.value, status="malformed").inc()
            raise MalformedFeedException(self.network.value, f"invalid JSON: {e}")

    def decode(self, payload: Any) -> List[NetworkSnapshotEntry]:
        """Validate a raw payload and convert it into snapshot entries"""
        if not isinstance(payload, dict):
            raise MalformedFeedException(
                self.network.value, f"expected a JSON object, got {type(payload).__name__}"
            )
        try:
            feed = self.feed_model.model_validate(payload)
        except ValidationError as e:
            raise MalformedFeedException(self.network.value, f"unexpected payload shape: {e.error_count()} error(s)")
        return feed.snapshot()

    async def fetch_snapshot(self) -> List[NetworkSnapshotEntry]:
        """
        Fetch the list of pilots currently connected to the network.

        Raises:
            NetworkFeedException: transport failure, timeout or non-2xx
            MalformedFeedException: body is not the expected JSON document
        """
        payload = await self._get_json()

        try:
            entries = self.decode(payload)
        except MalformedFeedException:
            network_fetch_total.labels(network=self.network.value, status="malformed").inc()
            logger.error(f"Malformed {self.network.value} feed", extra={"url": self.url})
            raise

        network_fetch_total.labels(network=self.network.value, status="success").inc()
        logger.debug(f"Retrieved {len(entries)} pilots from {self.network.value}")
        return entries

