from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


pilot_permissions = Table(
    "pilot_permissions",
    Base.metadata,
    Column("pilot_id", Integer, ForeignKey("pilots.id", ondelete="CASCADE"), primary_key=True),
    Column("permission_id", Integer, ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
)


class Permission(Base):
    """Named capability granted to pilots (ADMIN, VALIDATOR_MANAGER, ...)"""
    __tablename__ = "permissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), unique=True, nullable=False, index=True)
    description = Column(String(255), nullable=True)

    def __repr__(self):
        return f"<Permission(name={self.name})>"


class Pilot(Base):
    """
    Pilot account.
    Doubles as the authenticated user of the API.
    """
    __tablename__ = "pilots"

    id = Column(Integer, primary_key=True, autoincrement=True)

    email = Column(String(100), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False, doc="Bcrypt hashed password")
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)

    callsign = Column(String(20), unique=True, nullable=True, index=True)
    ivao_id = Column(String(20), nullable=True)
    vatsim_id = Column(String(20), nullable=True)

    location_icao = Column(String(4), nullable=True, doc="Airport where the pilot currently is")
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    permissions = relationship("Permission", secondary=pilot_permissions, lazy="selectin")
    flights = relationship("Flight", back_populates="pilot")

    def __repr__(self):
        return f"<Pilot(id={self.id}, callsign={self.callsign}, location={self.location_icao})>"

    @property
    def permission_names(self) -> set:
        return {permission.name for permission in self.permissions}
