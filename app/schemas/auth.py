"""
Authentication schemas.
"""
from pydantic import BaseModel
from typing import Optional, List


class Token(BaseModel):
    """JWT token response"""
    access_token: str
    token_type: str


class PilotResponse(BaseModel):
    """Authenticated pilot"""
    id: int
    email: str
    first_name: str
    last_name: str
    callsign: Optional[str] = None
    location_icao: Optional[str] = None
    permissions: List[str] = []

    class Config:
        from_attributes = True
