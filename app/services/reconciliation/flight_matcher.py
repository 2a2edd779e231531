import logging
from typing import Iterable, Optional

from app.models.flight import Flight
from app.schemas.network import NetworkSnapshotEntry
from app.services.networks.base import NetworkStrategy

logger = logging.getLogger(__name__)


class FlightMatcher:
    """
    Pairs a stored flight with the pilot flying it on the network.

    The first live entry (in feed order) whose callsign contains the flight's
    callsign wins, even if a later entry would be an exact match. Matching
    stays deterministic across cycles as long as the feed order is stable.
    """

    def __init__(self, strategy: NetworkStrategy):
        self.strategy = strategy

    def match(self, flight: Flight, snapshot: Iterable[NetworkSnapshotEntry]) -> Optional[NetworkSnapshotEntry]:
        if not flight.callsign:
            # An empty callsign would be a substring of every entry
            logger.warning(
                "Flight has no callsign, skipping match",
                extra={"flight_id": flight.id, "network": self.strategy.network.value}
            )
            return None

        for entry in snapshot:
            if flight.callsign in entry.callsign and self.strategy.is_live(entry):
                return entry
        return None
