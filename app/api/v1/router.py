"""
API v1 main router.
Aggregates all API endpoint routers.
"""
from fastapi import APIRouter
from app.api.v1.endpoints import auth, flights, sync

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(flights.router, prefix="/flights", tags=["Flights"])
api_router.include_router(sync.router, prefix="/sync", tags=["Synchronization"])
