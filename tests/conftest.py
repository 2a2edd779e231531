"""Pytest fixtures for the crew center backend tests."""

import os

# Settings are cached on first import, so the environment goes first
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("ENABLE_SCHEDULER", "false")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import datetime
from typing import Callable, Optional

import pytest
from sqlalchemy import select

from app.core.security import get_password_hash
from app.database import Database
from app.models import (
    Flight,
    FlightKind,
    FlightStatus,
    FleetUnit,
    FleetState,
    Network,
    Permission,
    Pilot,
)


@pytest.fixture
async def database():
    """In-memory SQLite database with all tables created."""
    db = Database("sqlite+aiosqlite:///:memory:")
    await db.create_all()
    yield db
    await db.close()


@pytest.fixture
def make_pilot(database) -> Callable:
    """Insert a pilot, optionally with permissions."""
    async def _make(
        email: str = "pilot@example.com",
        password: str = "secret123",
        callsign: Optional[str] = "CCA101",
        location_icao: str = "LEBL",
        permissions: tuple = (),
    ) -> Pilot:
        async with database.session() as session:
            async with session.begin():
                granted = []
                for name in permissions:
                    existing = (
                        await session.execute(select(Permission).where(Permission.name == name))
                    ).scalar_one_or_none()
                    granted.append(existing or Permission(name=name))
                pilot = Pilot(
                    email=email,
                    hashed_password=get_password_hash(password),
                    first_name="Test",
                    last_name="Pilot",
                    callsign=callsign,
                    location_icao=location_icao,
                    permissions=granted,
                )
                session.add(pilot)
            return pilot
    return _make


@pytest.fixture
def make_fleet_unit(database) -> Callable:
    async def _make(state: FleetState = FleetState.IN_USE, location_icao: str = "LEBL") -> FleetUnit:
        async with database.session() as session:
            async with session.begin():
                unit = FleetUnit(aircraft_id="A320", name="EC-TST", state=state.value, location_icao=location_icao)
                session.add(unit)
            return unit
    return _make


@pytest.fixture
def make_flight(database) -> Callable:
    async def _make(
        pilot_id: int,
        callsign: str = "DLH400",
        network: Optional[Network] = Network.VATSIM,
        status: FlightStatus = FlightStatus.PENDING,
        kind: FlightKind = FlightKind.REGULAR,
        aircraft: str = "A320",
        fleet_id: Optional[int] = None,
        started_at: Optional[datetime] = None,
        closed_at: Optional[datetime] = None,
        departure_icao: str = "EDDF",
        arrival_icao: str = "EGLL",
    ) -> Flight:
        async with database.session() as session:
            async with session.begin():
                flight = Flight(
                    pilot_id=pilot_id,
                    callsign=callsign,
                    aircraft=aircraft,
                    flight_type=kind.value,
                    status=status.value,
                    network=network.value if network else None,
                    departure_icao=departure_icao,
                    arrival_icao=arrival_icao,
                    fleet_id=fleet_id,
                    started_at=started_at,
                    closed_at=closed_at,
                )
                session.add(flight)
            return flight
    return _make


@pytest.fixture
def load(database) -> Callable:
    """Read a row back in a fresh session."""
    async def _load(model, pk):
        async with database.session() as session:
            return await session.get(model, pk)
    return _load

