from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from app.database import Base


# Aircraft code used by free-mode reports until the network reveals the real type
UNASSIGNED_AIRCRAFT = "ZZZZ"


class FlightStatus(int, enum.Enum):
    """Validation status of a reported flight"""
    PENDING = 1
    ACCEPTED = 2
    REJECTED = 3


class FlightKind(int, enum.Enum):
    """How the flight was booked/reported"""
    MANUAL = 1
    REGULAR = 2
    CHARTER = 3
    ACARS = 4
    FREE_MODE = 5


class Network(str, enum.Enum):
    """Online flight-tracking network the flight is flown on"""
    IVAO = "IVAO"
    VATSIM = "VATSIM"


class Flight(Base):
    """
    Flight report model.
    One pilot operating one aircraft on one route.
    """
    __tablename__ = "flights"

    id = Column(Integer, primary_key=True, autoincrement=True)

    callsign = Column(String(20), nullable=False, index=True, doc="Callsign filed on the network")
    aircraft = Column(String(40), nullable=False, doc="ICAO aircraft type or ZZZZ")
    flight_type = Column(Integer, nullable=False, doc="FlightKind value")
    status = Column(Integer, nullable=False, default=FlightStatus.PENDING.value, index=True, doc="FlightStatus value")
    network = Column(String(10), nullable=True, index=True, doc="IVAO, VATSIM or NULL for offline")

    departure_icao = Column(String(4), nullable=False, doc="ICAO code of departure airport")
    arrival_icao = Column(String(4), nullable=False, doc="ICAO code of arrival airport")

    route_id = Column(Integer, nullable=True)
    fleet_id = Column(Integer, ForeignKey("fleet.id", ondelete="SET NULL"), nullable=True, index=True)
    pilot_id = Column(Integer, ForeignKey("pilots.id", ondelete="CASCADE"), nullable=False, index=True)

    # Set once each by the reconciliation engine
    started_at = Column(DateTime(timezone=True), nullable=True, doc="Block-off / departure time")
    closed_at = Column(DateTime(timezone=True), nullable=True, doc="On-blocks / arrival time")

    pirep = Column(Text, nullable=True)
    comment = Column(Text, nullable=True, doc="Validator comment")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_flight_network_status', 'network', 'status'),
    )

    pilot = relationship("Pilot", back_populates="flights")
    fleet_unit = relationship("FleetUnit", back_populates="flights")

    def __repr__(self):
        return f"<Flight(id={self.id}, callsign={self.callsign}, network={self.network}, status={self.status})>"

    def is_free_mode(self) -> bool:
        return self.flight_type == FlightKind.FREE_MODE

    def has_unassigned_aircraft(self) -> bool:
        return self.aircraft == UNASSIGNED_AIRCRAFT
