"""
Seed database with demo data: a small fleet, one pilot and a few pending
online flights the reconciliation jobs can pick up.
"""
import asyncio

from app.core.config import get_settings
from app.core.security import get_password_hash
from app.database import Database
from app.models.fleet import FleetUnit, FleetState
from app.models.flight import Flight, FlightKind, FlightStatus, Network, UNASSIGNED_AIRCRAFT
from app.models.pilot import Pilot

settings = get_settings()


async def seed_database():
    """Seed database with test data"""
    database = Database.from_settings(settings)
    await database.create_all()

    async with database.session() as session:
        async with session.begin():
            print("Seeding database...")

            fleet = [
                FleetUnit(aircraft_id="A320", name="EC-CCA", state=FleetState.FREE.value, location_icao="LEMD"),
                FleetUnit(aircraft_id="B738", name="EC-CCB", state=FleetState.IN_USE.value, location_icao="LEBL"),
                FleetUnit(aircraft_id="AT76", name="EC-CCC", state=FleetState.MAINTENANCE.value, location_icao="LEPA"),
            ]
            session.add_all(fleet)

            pilot = Pilot(
                email="pilot@crewcenter.local",
                hashed_password=get_password_hash("pilot123"),
                first_name="Demo",
                last_name="Pilot",
                callsign="CCA101",
                ivao_id="100001",
                vatsim_id="1000001",
                location_icao="LEBL",
            )
            session.add(pilot)
            await session.flush()

            session.add_all([
                Flight(
                    pilot_id=pilot.id, callsign="CCA101", aircraft="B738",
                    flight_type=FlightKind.CHARTER.value, status=FlightStatus.PENDING.value,
                    network=Network.IVAO.value, departure_icao="LEBL", arrival_icao="LEMD",
                    fleet_id=fleet[1].id,
                ),
                Flight(
                    pilot_id=pilot.id, callsign="CCA101", aircraft=UNASSIGNED_AIRCRAFT,
                    flight_type=FlightKind.FREE_MODE.value, status=FlightStatus.PENDING.value,
                    network=Network.VATSIM.value, departure_icao="LEMD", arrival_icao="LPPT",
                ),
            ])

        print("Seed complete")

    await database.close()


if __name__ == "__main__":
    asyncio.run(seed_database())
