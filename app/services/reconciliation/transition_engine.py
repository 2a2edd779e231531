import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from app.core.metrics import reconciliation_failures_total
from app.database import Database
from app.exceptions import PersistenceException
from app.models.flight import Flight
from app.repositories.fleet_repository import FleetRepository
from app.repositories.flight_repository import FlightRepository
from app.repositories.pilot_repository import PilotRepository
from app.schemas.network import NetworkSnapshotEntry
from app.services.networks.base import NetworkStrategy
from app.services.reconciliation.state_machine import FlightStateMachine, TransitionPlan

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class TransitionResult:
    """What actually changed in the store for one flight"""
    flight_id: int
    backfilled: bool = False
    started: bool = False
    closed: bool = False
    fleet_released: bool = False


class TransitionEngine:
    """
    Applies the network's rules to a matched (flight, entry) pair.

    All writes for one flight run in a single transaction. Every write is a
    conditional update, so a flight already moved by an overlapping cycle is
    left alone instead of being stamped twice.
    """

    def __init__(
        self,
        database: Database,
        strategy: NetworkStrategy,
        state_machine: Optional[FlightStateMachine] = None,
        clock: Callable[[], datetime] = utcnow
    ):
        self.database = database
        self.strategy = strategy
        self.state_machine = state_machine or FlightStateMachine()
        self.clock = clock

    def plan(self, flight: Flight, entry: NetworkSnapshotEntry) -> TransitionPlan:
        return self.state_machine.plan(
            flight,
            departing=self.strategy.is_departing(entry),
            arrived=self.strategy.is_arrived(entry),
            planned_aircraft=self.strategy.extract_planned_aircraft(entry),
        )

    async def apply(self, flight: Flight, entry: NetworkSnapshotEntry) -> TransitionResult:
        """
        Compute and persist the transition for one flight.

        Raises:
            PersistenceException: the transaction failed and was rolled back
        """
        plan = self.plan(flight, entry)
        result = TransitionResult(flight_id=flight.id)

        if plan.is_empty:
            return result

        now = self.clock()
        network = self.strategy.network.value
        stage = "flight"

        try:
            async with self.database.session() as session:
                async with session.begin():
                    flights = FlightRepository(session)

                    if plan.aircraft:
                        result.backfilled = await flights.backfill_aircraft(flight.id, plan.aircraft)

                    if plan.start:
                        result.started = await flights.mark_started(flight.id, now)

                    if plan.close:
                        result.closed = await flights.mark_closed(flight.id, now)

                    if result.closed:
                        if flight.fleet_id:
                            stage = "fleet"
                            result.fleet_released = await FleetRepository(session).release(
                                flight.fleet_id, flight.arrival_icao
                            )
                            if not result.fleet_released:
                                logger.warning(
                                    f"Fleet unit {flight.fleet_id} not found while closing flight {flight.id}",
                                    extra={"flight_id": flight.id, "network": network}
                                )

                        stage = "pilot"
                        moved = await PilotRepository(session).update_location(flight.pilot_id, flight.arrival_icao)
                        if not moved:
                            logger.warning(
                                f"Pilot {flight.pilot_id} not found while closing flight {flight.id}",
                                extra={"flight_id": flight.id, "network": network}
                            )
        except SQLAlchemyError as e:
            reconciliation_failures_total.labels(network=network, stage=stage).inc()
            raise PersistenceException(
                f"Failed to update flight {flight.id} ({stage} write): {str(e)}"
            ) from e

        self._log_result(flight, plan, result)
        return result

    def _log_result(self, flight: Flight, plan: TransitionPlan, result: TransitionResult):
        extra = {"flight_id": flight.id, "callsign": flight.callsign, "network": self.strategy.network.value}

        if result.backfilled:
            logger.info(f"Flight {flight.callsign} aircraft set to {plan.aircraft}", extra=extra)
        if result.started:
            logger.info(f"Flight {flight.callsign} started", extra=extra)
        if result.closed:
            logger.info(f"Flight {flight.callsign} closed at {flight.arrival_icao}", extra=extra)

        lost = (plan.start and not result.started) or (plan.close and not result.closed)
        if lost:
            logger.debug(f"Flight {flight.callsign} was already updated by another cycle", extra=extra)
