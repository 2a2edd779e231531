import httpx
from typing import Optional

from app.core.config import get_settings
from app.models.flight import Network
from app.schemas.vatsim import VatsimDataFeed
from app.services.external.network_feed_client import NetworkFeedClient

settings = get_settings()


class VatsimClient(NetworkFeedClient):
    """Client for the VATSIM v3 data feed"""

    network = Network.VATSIM
    feed_model = VatsimDataFeed

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        super().__init__(url or settings.VATSIM_DATA_URL, timeout=timeout, transport=transport)
