from app.models.flight import Flight, FlightStatus, FlightKind, Network, UNASSIGNED_AIRCRAFT
from app.models.fleet import FleetUnit, FleetState
from app.models.pilot import Pilot, Permission, pilot_permissions

__all__ = [
    "Flight",
    "FlightStatus",
    "FlightKind",
    "Network",
    "UNASSIGNED_AIRCRAFT",
    "FleetUnit",
    "FleetState",
    "Pilot",
    "Permission",
    "pilot_permissions",
]
