"""
Flight lifecycle as seen by the reconciliation engine.

    UNSTARTED --start--> STARTED --close--> CLOSED

Only PENDING flights move; anything a validator already accepted or rejected
is SETTLED and never touched. Each transition is one-way and happens at most
once; the repository enforces the same guards in its UPDATE ... WHERE.
"""
import enum
from dataclasses import dataclass
from typing import Optional

from app.models.flight import Flight, FlightStatus


class FlightPhase(str, enum.Enum):
    UNSTARTED = "unstarted"
    STARTED = "started"
    CLOSED = "closed"
    SETTLED = "settled"


def phase_of(flight: Flight) -> FlightPhase:
    if flight.closed_at is not None:
        return FlightPhase.CLOSED
    if flight.status != FlightStatus.PENDING:
        return FlightPhase.SETTLED
    if flight.started_at is None:
        return FlightPhase.UNSTARTED
    return FlightPhase.STARTED


@dataclass(frozen=True)
class TransitionPlan:
    """Updates to apply to one flight in one cycle"""
    aircraft: Optional[str] = None
    start: bool = False
    close: bool = False

    @property
    def is_empty(self) -> bool:
        return self.aircraft is None and not self.start and not self.close


class FlightStateMachine:
    """Guards for each transition, evaluated against the flight as loaded"""

    @staticmethod
    def can_backfill_aircraft(flight: Flight, planned_aircraft: Optional[str]) -> bool:
        return flight.is_free_mode() and flight.has_unassigned_aircraft() and bool(planned_aircraft)

    @staticmethod
    def can_start(flight: Flight) -> bool:
        return phase_of(flight) == FlightPhase.UNSTARTED

    @staticmethod
    def can_close(flight: Flight) -> bool:
        return phase_of(flight) == FlightPhase.STARTED

    def plan(
        self,
        flight: Flight,
        departing: bool,
        arrived: bool,
        planned_aircraft: Optional[str] = None
    ) -> TransitionPlan:
        # start and close are mutually exclusive: both are judged on the phase
        # the flight had when it was loaded
        return TransitionPlan(
            aircraft=planned_aircraft if self.can_backfill_aircraft(flight, planned_aircraft) else None,
            start=departing and self.can_start(flight),
            close=arrived and self.can_close(flight),
        )
