from typing import Optional, List
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import datetime
from app.models.flight import Flight, FlightStatus, Network, UNASSIGNED_AIRCRAFT


class FlightRepository:
    """
    Repository for Flight model operations.

    Writes are flushed, never committed: the caller owns the transaction.
    The mark_* methods are conditional updates that return False when the
    row no longer satisfies the guard (another cycle got there first).
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, **fields) -> Flight:
        """Create new flight record"""
        flight = Flight(**fields)
        self.db.add(flight)
        await self.db.flush()
        await self.db.refresh(flight)
        return flight

    async def get_by_id(self, flight_id: int) -> Optional[Flight]:
        result = await self.db.execute(
            select(Flight).where(Flight.id == flight_id)
        )
        return result.scalar_one_or_none()

    async def find_flights(self, network: Network, status: FlightStatus = FlightStatus.PENDING) -> List[Flight]:
        """Candidates for reconciliation, in insertion order"""
        result = await self.db.execute(
            select(Flight)
            .where(Flight.network == network.value, Flight.status == status.value)
            .order_by(Flight.id)
        )
        return list(result.scalars().all())

    async def list_flights(
        self,
        status: Optional[FlightStatus] = None,
        network: Optional[Network] = None,
        pilot_id: Optional[int] = None
    ) -> List[Flight]:
        query = select(Flight)

        if status is not None:
            query = query.where(Flight.status == status.value)
        if network is not None:
            query = query.where(Flight.network == network.value)
        if pilot_id is not None:
            query = query.where(Flight.pilot_id == pilot_id)

        result = await self.db.execute(query.order_by(Flight.id.desc()))
        return list(result.scalars().all())

    async def update_status(self, flight_id: int, status: FlightStatus, comment: Optional[str] = None) -> Optional[Flight]:
        """Validator decision (ACCEPTED / REJECTED)"""
        flight = await self.get_by_id(flight_id)
        if not flight:
            return None

        flight.status = status.value
        if comment is not None:
            flight.comment = comment
        await self.db.flush()
        await self.db.refresh(flight)
        return flight

    async def backfill_aircraft(self, flight_id: int, aircraft: str) -> bool:
        """Replace the ZZZZ placeholder with the type seen on the network"""
        result = await self.db.execute(
            update(Flight)
            .where(Flight.id == flight_id, Flight.aircraft == UNASSIGNED_AIRCRAFT)
            .values(aircraft=aircraft)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def mark_started(self, flight_id: int, started_at: datetime) -> bool:
        result = await self.db.execute(
            update(Flight)
            .where(
                Flight.id == flight_id,
                Flight.status == FlightStatus.PENDING.value,
                Flight.started_at.is_(None),
            )
            .values(started_at=started_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def mark_closed(self, flight_id: int, closed_at: datetime) -> bool:
        result = await self.db.execute(
            update(Flight)
            .where(
                Flight.id == flight_id,
                Flight.status == FlightStatus.PENDING.value,
                Flight.started_at.is_not(None),
                Flight.closed_at.is_(None),
            )
            .values(closed_at=closed_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
