import logging
from pydantic import BaseModel, Field, ValidationError
from typing import Any, Optional, Type
from datetime import datetime, timezone

from app.models.flight import Network

logger = logging.getLogger(__name__)


def drop_invalid_entries(model: Type[BaseModel], items: Any, network: Network) -> Any:
    """
    Validate feed entries one by one, skipping those that do not parse.

    Anything other than a list is returned untouched so the document-level
    validation still rejects it.
    """
    if not isinstance(items, list):
        return items

    valid = []
    for index, item in enumerate(items):
        try:
            valid.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(
                f"Skipping unreadable {network.value} entry #{index}: {e.error_count()} error(s)",
                extra={"network": network.value, "index": index}
            )
    return valid


class NetworkSnapshotEntry(BaseModel):
    """
    One pilot currently connected to a flight-tracking network.
    Built fresh on every fetch and discarded after the reconciliation pass.
    """
    network: Network = Field(..., description="Network the entry was fetched from")
    callsign: str = Field(..., description="Callsign the pilot is connected with")
    is_tracked: bool = Field(False, description="IVAO: the network holds a last track for this pilot")
    last_state: Optional[str] = Field(None, description="IVAO: state of the last track (Departing, On Blocks, ...)")
    has_flight_plan: bool = Field(False, description="A flight plan object is attached to the entry")
    groundspeed: Optional[float] = Field(None, description="VATSIM: groundspeed in knots")
    planned_aircraft: Optional[str] = Field(None, description="Aircraft type from the entry's flight plan")

    class Config:
        json_schema_extra = {
            "example": {
                "network": "VATSIM",
                "callsign": "DLH400",
                "is_tracked": False,
                "last_state": None,
                "has_flight_plan": True,
                "groundspeed": 80,
                "planned_aircraft": "A320"
            }
        }


class ReconciliationStats(BaseModel):
    """Outcome of one reconciliation cycle for one network"""
    network: Network
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    snapshot_size: int = 0
    candidates: int = 0
    matched: int = 0
    backfilled: int = 0
    started: int = 0
    closed: int = 0
    failed: int = 0
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None
