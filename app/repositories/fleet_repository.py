from typing import Optional
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.fleet import FleetUnit, FleetState


class FleetRepository:
    """Repository for FleetUnit operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, fleet_id: int) -> Optional[FleetUnit]:
        result = await self.db.execute(
            select(FleetUnit).where(FleetUnit.id == fleet_id)
        )
        return result.scalar_one_or_none()

    async def allocate(self, fleet_id: int) -> bool:
        """Book a free aircraft for a charter flight"""
        result = await self.db.execute(
            update(FleetUnit)
            .where(FleetUnit.id == fleet_id, FleetUnit.state == FleetState.FREE.value)
            .values(state=FleetState.IN_USE.value)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def release(self, fleet_id: int, location_icao: str) -> bool:
        """Park the aircraft at its new airport and make it bookable again"""
        result = await self.db.execute(
            update(FleetUnit)
            .where(FleetUnit.id == fleet_id)
            .values(state=FleetState.FREE.value, location_icao=location_icao)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
