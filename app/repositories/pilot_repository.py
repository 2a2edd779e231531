from typing import Optional, Set
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.pilot import Pilot, Permission, pilot_permissions


class PilotRepository:
    """Repository for Pilot operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, pilot_id: int) -> Optional[Pilot]:
        result = await self.db.execute(
            select(Pilot).where(Pilot.id == pilot_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Pilot]:
        result = await self.db.execute(
            select(Pilot).where(Pilot.email == email)
        )
        return result.scalar_one_or_none()

    async def get_permission_names(self, pilot_id: int) -> Set[str]:
        result = await self.db.execute(
            select(Permission.name)
            .join(pilot_permissions, pilot_permissions.c.permission_id == Permission.id)
            .where(pilot_permissions.c.pilot_id == pilot_id)
        )
        return set(result.scalars().all())

    async def update_location(self, pilot_id: int, location_icao: str) -> bool:
        result = await self.db.execute(
            update(Pilot)
            .where(Pilot.id == pilot_id)
            .values(location_icao=location_icao)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
