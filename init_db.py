"""
Database initialization script.
Creates the tables, the permission catalogue and a default admin pilot.
"""
import asyncio
import os

from app.core.config import get_settings
from app.core.security import get_password_hash
from app.database import Database
from app.models.pilot import Permission, Pilot
from app.repositories.pilot_repository import PilotRepository
from sqlalchemy import select

settings = get_settings()

PERMISSIONS = [
    ("ADMIN", "Full access to all actions"),
    ("VALIDATOR_MANAGER", "Accept or reject reported flights"),
    ("OPERATIONS_MANAGER", "Manage simulators, airlines and network synchronization"),
    ("USER_MANAGER", "Manage medals, ranks and users"),
    ("TOUR_MANAGER", "Manage tours, legs and tour reports"),
    ("EVENT_MANAGER", "Create, edit and delete events"),
]


async def init_db():
    """Initialize database with permissions and a default admin pilot"""
    database = Database.from_settings(settings)
    await database.create_all()

    async with database.session() as session:
        async with session.begin():
            existing = set((await session.execute(select(Permission.name))).scalars().all())
            for name, description in PERMISSIONS:
                if name not in existing:
                    session.add(Permission(name=name, description=description))

        admin_email = os.getenv("ADMIN_EMAIL", "admin@crewcenter.local")
        async with session.begin():
            if await PilotRepository(session).get_by_email(admin_email):
                print(f"Admin pilot {admin_email} already exists")
            else:
                admin_permission = (
                    await session.execute(select(Permission).where(Permission.name == "ADMIN"))
                ).scalar_one()
                session.add(Pilot(
                    email=admin_email,
                    hashed_password=get_password_hash(os.getenv("ADMIN_PASSWORD", "admin123")),
                    first_name="System",
                    last_name="Administrator",
                    callsign="ADM001",
                    permissions=[admin_permission],
                ))
                print(f"Admin pilot created ({admin_email})")

    await database.close()


if __name__ == "__main__":
    asyncio.run(init_db())
