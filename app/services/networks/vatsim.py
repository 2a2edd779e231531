from typing import Callable, Optional

from app.models.flight import Network
from app.schemas.network import NetworkSnapshotEntry
from app.services.external.network_feed_client import NetworkFeedClient
from app.services.external.vatsim_client import VatsimClient
from app.services.networks.base import NetworkStrategy


GROUNDSPEED_THRESHOLD_KT = 60


class VatsimStrategy(NetworkStrategy):
    """
    VATSIM: the feed has no flight phase, so it is inferred from groundspeed.

    Both predicates include the threshold itself. Closing is only ever
    evaluated for flights that already started, but a slow taxi after a
    brief burst above the threshold will close the flight.
    """

    network = Network.VATSIM

    def __init__(
        self,
        client_factory: Optional[Callable[[], NetworkFeedClient]] = None,
        threshold_kt: float = GROUNDSPEED_THRESHOLD_KT
    ):
        super().__init__(client_factory or VatsimClient)
        self.threshold_kt = threshold_kt

    def is_live(self, entry: NetworkSnapshotEntry) -> bool:
        return entry.has_flight_plan

    def is_departing(self, entry: NetworkSnapshotEntry) -> bool:
        return entry.groundspeed is not None and entry.groundspeed >= self.threshold_kt

    def is_arrived(self, entry: NetworkSnapshotEntry) -> bool:
        return entry.groundspeed is not None and entry.groundspeed <= self.threshold_kt
