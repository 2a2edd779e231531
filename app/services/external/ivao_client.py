import httpx
from typing import Optional

from app.core.config import get_settings
from app.models.flight import Network
from app.schemas.ivao import IvaoWhazzup
from app.services.external.network_feed_client import NetworkFeedClient

settings = get_settings()


class IvaoClient(NetworkFeedClient):
    """Client for the IVAO whazzup v2 tracker feed"""

    network = Network.IVAO
    feed_model = IvaoWhazzup

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        super().__init__(url or settings.IVAO_WHAZZUP_URL, timeout=timeout, transport=transport)
