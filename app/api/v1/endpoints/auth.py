"""
Authentication endpoints.
Handles pilot login and the permission check used by protected endpoints.
"""
from typing import Callable
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.security import verify_password, create_access_token, decode_access_token
from app.database import get_db
from app.exceptions import AuthenticationException
from app.models.pilot import Pilot
from app.repositories.pilot_repository import PilotRepository
from app.schemas.auth import Token, PilotResponse

router = APIRouter()
settings = get_settings()

# OAuth2 scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_PREFIX}/auth/login")


async def get_current_pilot(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db)
) -> Pilot:
    """
    Get current authenticated pilot from JWT token.
    Used as dependency in protected endpoints.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        pilot_id = decode_access_token(token)
    except AuthenticationException:
        raise credentials_exception

    pilot = await PilotRepository(db).get_by_id(pilot_id)

    if pilot is None:
        raise HTTPException(status_code=404, detail="Pilot not found")
    if not pilot.is_active:
        raise HTTPException(status_code=403, detail="Inactive pilot")

    return pilot


def require_permissions(*required: str) -> Callable:
    """
    Dependency factory: the pilot must hold at least one of `required`.

    Usage:
        @router.get("/pending")
        async def pending(pilot: Pilot = Depends(require_permissions("VALIDATOR_MANAGER"))):
            ...
    """
    async def checker(
        pilot: Pilot = Depends(get_current_pilot),
        db: AsyncSession = Depends(get_db)
    ) -> Pilot:
        granted = await PilotRepository(db).get_permission_names(pilot.id)
        if not granted.intersection(required):
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return pilot

    return checker


@router.post("/login", response_model=Token)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db)
):
    """
    Login with email (sent as `username`) and password.
    Returns a JWT bearer token.
    """
    pilot = await PilotRepository(db).get_by_email(form_data.username)

    if not pilot or not verify_password(form_data.password, pilot.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not pilot.is_active:
        raise HTTPException(status_code=403, detail="Inactive pilot")

    return Token(access_token=create_access_token(pilot.id), token_type="bearer")


@router.get("/me", response_model=PilotResponse)
async def read_current_pilot(
    pilot: Pilot = Depends(get_current_pilot)
):
    """Get the authenticated pilot"""
    return PilotResponse(
        id=pilot.id,
        email=pilot.email,
        first_name=pilot.first_name,
        last_name=pilot.last_name,
        callsign=pilot.callsign,
        location_icao=pilot.location_icao,
        permissions=sorted(pilot.permission_names)
    )
