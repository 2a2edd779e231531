"""
VATSIM v3 data feed.
"""
from pydantic import BaseModel, Field, validator
from typing import Optional, List

from app.models.flight import Network
from app.schemas.network import NetworkSnapshotEntry, drop_invalid_entries


class VatsimFlightPlan(BaseModel):
    aircraft: Optional[str] = Field(
        None,
        description="Full equipment string, e.g. A320/M-SDE2E3FGHIJ1RWY/LB1. Only used as the planned "
                    "aircraft when aircraft_short is missing"
    )
    aircraft_short: Optional[str] = Field(None, description="ICAO aircraft type")
    departure: Optional[str] = None
    arrival: Optional[str] = None


class VatsimPilot(BaseModel):
    callsign: str
    groundspeed: Optional[float] = Field(None, description="Groundspeed in knots")
    altitude: Optional[float] = None
    flight_plan: Optional[VatsimFlightPlan] = None

    @validator('callsign')
    def validate_callsign(cls, v):
        """Clean up callsign; a blank one cannot be matched"""
        v = v.strip()
        if not v:
            raise ValueError("callsign is blank")
        return v

    def _planned_aircraft(self) -> Optional[str]:
        """ICAO type from the flight plan, else the full equipment string"""
        if not self.flight_plan:
            return None
        return self.flight_plan.aircraft_short or self.flight_plan.aircraft

    def to_snapshot_entry(self) -> NetworkSnapshotEntry:
        return NetworkSnapshotEntry(
            network=Network.VATSIM,
            callsign=self.callsign,
            has_flight_plan=self.flight_plan is not None,
            groundspeed=self.groundspeed,
            planned_aircraft=self._planned_aircraft(),
        )


class VatsimDataFeed(BaseModel):
    """Top-level data document: { pilots: [...] }"""
    pilots: List[VatsimPilot] = Field(default_factory=list)

    @validator('pilots', pre=True)
    def validate_pilots(cls, v):
        return drop_invalid_entries(VatsimPilot, v or [], Network.VATSIM)

    def snapshot(self) -> List[NetworkSnapshotEntry]:
        return [pilot.to_snapshot_entry() for pilot in self.pilots]

    class Config:
        json_schema_extra = {
            "example": {
                "pilots": [
                    {
                        "callsign": "DLH400",
                        "groundspeed": 80,
                        "altitude": 1200,
                        "flight_plan": {"aircraft": "A320", "aircraft_short": "A320", "departure": "EDDF", "arrival": "EGLL"}
                    }
                ]
            }
        }
