import logging
from typing import List

from app.core.metrics import track_reconciliation, reconciliation_failures_total
from app.database import Database
from app.exceptions import NetworkFeedException, PersistenceException
from app.models.flight import Flight, FlightStatus
from app.repositories.flight_repository import FlightRepository
from app.schemas.network import NetworkSnapshotEntry, ReconciliationStats
from app.services.networks.base import NetworkStrategy
from app.services.reconciliation.flight_matcher import FlightMatcher
from app.services.reconciliation.transition_engine import TransitionEngine

logger = logging.getLogger(__name__)


class ReconciliationOrchestrator:
    """
    One reconciliation cycle for one network:
    fetch snapshot -> load pending flights -> match -> apply transitions.

    Holds no state between cycles; the scheduler builds a new one per run.
    """

    def __init__(self, database: Database, strategy: NetworkStrategy):
        self.database = database
        self.strategy = strategy
        self.network = strategy.network
        self.matcher = FlightMatcher(strategy)
        self.engine = TransitionEngine(database, strategy)

    async def load_candidates(self) -> List[Flight]:
        async with self.database.session() as session:
            return await FlightRepository(session).find_flights(self.network, FlightStatus.PENDING)

    @track_reconciliation()
    async def reconcile(self) -> ReconciliationStats:
        """
        Run the pipeline once.

        Fetch errors end the cycle early and are reported in the returned
        stats. Per-flight failures are logged and counted; the remaining
        flights are still processed.

        Returns:
            ReconciliationStats for this network and cycle
        """
        stats = ReconciliationStats(network=self.network)

        try:
            snapshot = await self.strategy.fetch_snapshot()
        except NetworkFeedException as e:
            logger.error(
                f"{self.network.value} reconciliation skipped: {str(e)}",
                extra={"network": self.network.value}
            )
            stats.error = str(e)
            return stats

        stats.snapshot_size = len(snapshot)
        candidates = await self.load_candidates()
        stats.candidates = len(candidates)

        for flight in candidates:
            await self._process_flight(flight, snapshot, stats)

        logger.info(
            f"{self.network.value} reconciliation completed",
            extra=stats.model_dump(mode="json")
        )
        return stats

    async def _process_flight(
        self,
        flight: Flight,
        snapshot: List[NetworkSnapshotEntry],
        stats: ReconciliationStats
    ):
        extra = {"flight_id": flight.id, "network": self.network.value}

        try:
            entry = self.matcher.match(flight, snapshot)
            if entry is None:
                return
            stats.matched += 1

            result = await self.engine.apply(flight, entry)
        except PersistenceException as e:
            stats.failed += 1
            logger.error(f"Failed to reconcile flight {flight.id}: {str(e)}", extra=extra)
            return
        except Exception as e:
            stats.failed += 1
            reconciliation_failures_total.labels(network=self.network.value, stage="unexpected").inc()
            logger.error(f"Unexpected error reconciling flight {flight.id}: {str(e)}", extra=extra, exc_info=True)
            return

        stats.backfilled += int(result.backfilled)
        stats.started += int(result.started)
        stats.closed += int(result.closed)
