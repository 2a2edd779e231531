"""
IVAO whazzup v2 feed.

Only the fields the reconciliation engine reads are declared; everything else
in the (large) payload is ignored.
"""
from pydantic import BaseModel, Field, validator
from typing import Optional, List

from app.models.flight import Network
from app.schemas.network import NetworkSnapshotEntry, drop_invalid_entries


class IvaoLastTrack(BaseModel):
    """Most recent track point of a connected pilot"""
    state: Optional[str] = Field(None, description="Flight phase, e.g. Boarding, Departing, En Route, On Blocks")
    groundSpeed: Optional[float] = Field(None, description="Groundspeed in knots")
    onGround: Optional[bool] = None


class IvaoFlightPlan(BaseModel):
    aircraftId: Optional[str] = Field(None, description="ICAO aircraft type")
    departureId: Optional[str] = None
    arrivalId: Optional[str] = None


class IvaoPilot(BaseModel):
    callsign: str
    lastTrack: Optional[IvaoLastTrack] = None
    flightPlan: Optional[IvaoFlightPlan] = None

    @validator('callsign')
    def validate_callsign(cls, v):
        """Clean up callsign; a blank one cannot be matched"""
        v = v.strip()
        if not v:
            raise ValueError("callsign is blank")
        return v

    def to_snapshot_entry(self) -> NetworkSnapshotEntry:
        return NetworkSnapshotEntry(
            network=Network.IVAO,
            callsign=self.callsign,
            is_tracked=self.lastTrack is not None,
            last_state=self.lastTrack.state if self.lastTrack else None,
            has_flight_plan=self.flightPlan is not None,
            groundspeed=self.lastTrack.groundSpeed if self.lastTrack else None,
            planned_aircraft=self.flightPlan.aircraftId if self.flightPlan else None,
        )


class IvaoClients(BaseModel):
    pilots: List[IvaoPilot] = Field(default_factory=list)

    @validator('pilots', pre=True)
    def validate_pilots(cls, v):
        return drop_invalid_entries(IvaoPilot, v or [], Network.IVAO)


class IvaoWhazzup(BaseModel):
    """Top-level whazzup document: { clients: { pilots: [...] } }"""
    clients: Optional[IvaoClients] = None

    def snapshot(self) -> List[NetworkSnapshotEntry]:
        if not self.clients:
            return []
        return [pilot.to_snapshot_entry() for pilot in self.clients.pilots]

    class Config:
        json_schema_extra = {
            "example": {
                "clients": {
                    "pilots": [
                        {
                            "callsign": "AFR123",
                            "lastTrack": {"state": "Departing", "groundSpeed": 142, "onGround": False},
                            "flightPlan": {"aircraftId": "A320", "departureId": "LFPG", "arrivalId": "LEMD"}
                        }
                    ]
                }
            }
        }
