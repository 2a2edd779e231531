from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from app.models.flight import Network
from app.schemas.network import NetworkSnapshotEntry
from app.services.external.network_feed_client import NetworkFeedClient


class NetworkStrategy(ABC):
    """
    Everything the reconciliation pipeline needs to know about one network:
    how to fetch its snapshot and how to read a snapshot entry.

    A fresh feed client is built for every fetch, so overlapping cycles never
    share an HTTP connection pool.
    """

    network: Network

    def __init__(self, client_factory: Callable[[], NetworkFeedClient]):
        self._client_factory = client_factory

    async def fetch_snapshot(self) -> List[NetworkSnapshotEntry]:
        async with self._client_factory() as client:
            return await client.fetch_snapshot()

    @abstractmethod
    def is_live(self, entry: NetworkSnapshotEntry) -> bool:
        """Entry is eligible for matching"""

    @abstractmethod
    def is_departing(self, entry: NetworkSnapshotEntry) -> bool:
        """Entry shows the flight has started"""

    @abstractmethod
    def is_arrived(self, entry: NetworkSnapshotEntry) -> bool:
        """Entry shows the flight has ended"""

    def extract_planned_aircraft(self, entry: NetworkSnapshotEntry) -> Optional[str]:
        return entry.planned_aircraft or None

    def __repr__(self):
        return f"<{type(self).__name__}(network={self.network.value})>"
