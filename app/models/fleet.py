from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from app.database import Base


class FleetState(int, enum.Enum):
    """Availability of a fleet aircraft"""
    FREE = 0
    IN_USE = 1
    MAINTENANCE = 2


class FleetUnit(Base):
    """
    Physical airframe of the virtual airline, bookable for charter flights.
    """
    __tablename__ = "fleet"

    id = Column(Integer, primary_key=True, autoincrement=True)
    aircraft_id = Column(String(10), nullable=False, doc="ICAO aircraft type")
    name = Column(String(50), nullable=False, doc="Registration or display name")
    state = Column(Integer, nullable=False, default=FleetState.FREE.value, index=True, doc="FleetState value")
    life = Column(Integer, nullable=False, default=100, doc="Remaining airframe condition (%)")
    location_icao = Column(String(4), nullable=True, index=True, doc="Airport where the aircraft is parked")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    flights = relationship("Flight", back_populates="fleet_unit")

    def __repr__(self):
        return f"<FleetUnit(id={self.id}, name={self.name}, state={self.state}, location={self.location_icao})>"

    def is_available(self) -> bool:
        return self.state == FleetState.FREE
