"""
Flight endpoints.
Flight reporting by pilots and validation by staff. Timestamps of online
flights are maintained by the reconciliation jobs.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.endpoints.auth import get_current_pilot, require_permissions
from app.database import get_db
from app.models.flight import FlightKind, FlightStatus, UNASSIGNED_AIRCRAFT
from app.models.pilot import Pilot
from app.repositories.fleet_repository import FleetRepository
from app.repositories.flight_repository import FlightRepository
from app.schemas.flight import FlightReportCreate, FlightResponse, FlightStatusUpdate, REPORT_KINDS

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=List[FlightResponse])
async def list_my_flights(
    db: AsyncSession = Depends(get_db),
    pilot: Pilot = Depends(get_current_pilot)
):
    """List the authenticated pilot's flights, newest first"""
    return await FlightRepository(db).list_flights(pilot_id=pilot.id)


@router.get("/status/{number}", response_model=List[FlightResponse])
async def list_my_flights_by_status(
    number: int = Path(..., description="1 = pending, 2 = accepted, 3 = rejected"),
    db: AsyncSession = Depends(get_db),
    pilot: Pilot = Depends(get_current_pilot)
):
    try:
        status = FlightStatus(number)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid status")

    return await FlightRepository(db).list_flights(status=status, pilot_id=pilot.id)


@router.get("/pending", response_model=List[FlightResponse])
async def list_pending_flights(
    db: AsyncSession = Depends(get_db),
    _: Pilot = Depends(require_permissions("ADMIN", "VALIDATOR_MANAGER"))
):
    """All flights awaiting validation"""
    return await FlightRepository(db).list_flights(status=FlightStatus.PENDING)


@router.put("/{flight_id}/status", response_model=FlightResponse)
async def update_flight_status(
    flight_id: int,
    update: FlightStatusUpdate,
    db: AsyncSession = Depends(get_db),
    validator: Pilot = Depends(require_permissions("ADMIN", "VALIDATOR_MANAGER"))
):
    """Accept or reject a reported flight"""
    flight = await FlightRepository(db).update_status(flight_id, update.status, update.comment)
    if not flight:
        raise HTTPException(status_code=404, detail="Flight not found")

    logger.info(
        f"Flight {flight_id} set to {update.status.name}",
        extra={"flight_id": flight_id, "validator_id": validator.id}
    )
    return flight


@router.post("/report/{kind}", response_model=FlightResponse, status_code=201)
async def report_flight(
    kind: str,
    report: FlightReportCreate,
    db: AsyncSession = Depends(get_db),
    pilot: Pilot = Depends(get_current_pilot)
):
    """
    Report a flight (manual, regular, charter, acars or free-mode).

    Free-mode flights are filed under the pilot's own callsign with the
    aircraft left as ZZZZ until the network shows what is being flown.
    Charter flights book the given fleet aircraft.
    """
    flight_kind = REPORT_KINDS.get(kind.lower())
    if flight_kind is None:
        raise HTTPException(status_code=404, detail=f"Unknown report type: {kind}")

    callsign = report.callsign
    aircraft = report.aircraft

    if flight_kind == FlightKind.FREE_MODE:
        if not pilot.callsign:
            raise HTTPException(status_code=400, detail="User callsign not found")
        callsign = pilot.callsign
        aircraft = UNASSIGNED_AIRCRAFT
    elif not callsign or not aircraft:
        raise HTTPException(status_code=400, detail="callsign and aircraft are required")

    if report.fleet_id is not None:
        fleet_repo = FleetRepository(db)
        unit = await fleet_repo.get_by_id(report.fleet_id)
        if not unit:
            raise HTTPException(status_code=404, detail="Fleet aircraft not found")
        if flight_kind == FlightKind.CHARTER and (
            not unit.is_available() or not await fleet_repo.allocate(report.fleet_id)
        ):
            raise HTTPException(status_code=409, detail="Fleet aircraft is not available")

    flight = await FlightRepository(db).create(
        pilot_id=pilot.id,
        status=FlightStatus.PENDING.value,
        flight_type=flight_kind.value,
        callsign=callsign,
        aircraft=aircraft,
        departure_icao=report.departure_icao,
        arrival_icao=report.arrival_icao,
        route_id=report.route_id,
        fleet_id=report.fleet_id,
        started_at=report.started_at,
        closed_at=report.closed_at,
        pirep=report.pirep,
        network=report.network.value if report.network else None,
    )

    logger.info(
        f"Flight {flight.id} reported ({kind})",
        extra={"flight_id": flight.id, "pilot_id": pilot.id, "network": flight.network}
    )
    return flight
