from typing import Callable, Optional

from app.models.flight import Network
from app.schemas.network import NetworkSnapshotEntry
from app.services.external.ivao_client import IvaoClient
from app.services.external.network_feed_client import NetworkFeedClient
from app.services.networks.base import NetworkStrategy


# lastTrack.state values reported by the IVAO tracker
DEPARTING_STATE = "Departing"
ON_BLOCKS_STATE = "On Blocks"


class IvaoStrategy(NetworkStrategy):
    """IVAO: flight phase comes straight from the tracker's last track state"""

    network = Network.IVAO

    def __init__(self, client_factory: Optional[Callable[[], NetworkFeedClient]] = None):
        super().__init__(client_factory or IvaoClient)

    def is_live(self, entry: NetworkSnapshotEntry) -> bool:
        return entry.is_tracked

    def is_departing(self, entry: NetworkSnapshotEntry) -> bool:
        return entry.last_state == DEPARTING_STATE

    def is_arrived(self, entry: NetworkSnapshotEntry) -> bool:
        return entry.last_state == ON_BLOCKS_STATE
