from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime

from app.models.flight import FlightKind, FlightStatus, Network


# URL segment -> FlightKind for /flights/report/{kind}
REPORT_KINDS = {
    "manual": FlightKind.MANUAL,
    "regular": FlightKind.REGULAR,
    "charter": FlightKind.CHARTER,
    "acars": FlightKind.ACARS,
    "free-mode": FlightKind.FREE_MODE,
}


class FlightReportCreate(BaseModel):
    """Flight report submitted by a pilot"""
    callsign: Optional[str] = Field(None, max_length=20)
    aircraft: Optional[str] = Field(None, max_length=40)
    departure_icao: str = Field(..., min_length=4, max_length=4)
    arrival_icao: str = Field(..., min_length=4, max_length=4)
    route_id: Optional[int] = None
    fleet_id: Optional[int] = None
    started_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    pirep: Optional[str] = None
    network: Optional[Network] = None

    @validator('departure_icao', 'arrival_icao')
    def validate_icao(cls, v):
        return v.upper().strip()

    @validator('callsign')
    def validate_callsign(cls, v):
        """Clean up callsign"""
        if v:
            return v.upper().strip()
        return v


class FlightStatusUpdate(BaseModel):
    """Validator decision"""
    status: FlightStatus
    comment: Optional[str] = None

    @validator('status')
    def validate_decision(cls, v):
        if v == FlightStatus.PENDING:
            raise ValueError("status must be ACCEPTED (2) or REJECTED (3)")
        return v


class FlightResponse(BaseModel):
    id: int
    callsign: str
    aircraft: str
    flight_type: int
    status: int
    network: Optional[str] = None
    departure_icao: str
    arrival_icao: str
    route_id: Optional[int] = None
    fleet_id: Optional[int] = None
    pilot_id: int
    started_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    pirep: Optional[str] = None
    comment: Optional[str] = None

    class Config:
        from_attributes = True
