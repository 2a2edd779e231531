"""
Synchronization endpoints.
Inspect and trigger reconciliation with the online networks.
"""
from fastapi import APIRouter, Depends, HTTPException, Request

from app.api.v1.endpoints.auth import get_current_pilot, require_permissions
from app.models.flight import Network
from app.models.pilot import Pilot
from app.services.orchestration.scheduler import ReconciliationScheduler

router = APIRouter()


def get_scheduler(request: Request) -> ReconciliationScheduler:
    scheduler = getattr(request.app.state, "scheduler", None)
    if scheduler is None:
        raise HTTPException(status_code=503, detail="Scheduler not initialized")
    return scheduler


@router.get("/status")
async def get_sync_status(
    request: Request,
    _: Pilot = Depends(get_current_pilot)
):
    """
    Get reconciliation scheduler status.
    Requires authentication.
    """
    scheduler = getattr(request.app.state, "scheduler", None)
    if not scheduler:
        return {
            "running": False,
            "networks": {}
        }

    return scheduler.get_status()


@router.post("/trigger/{network}")
async def trigger_manual_sync(
    network: Network,
    scheduler: ReconciliationScheduler = Depends(get_scheduler),
    _: Pilot = Depends(require_permissions("ADMIN", "OPERATIONS_MANAGER"))
):
    """
    Run one reconciliation cycle for a network now.
    Requires ADMIN or OPERATIONS_MANAGER.
    """
    return await scheduler.trigger_manual_sync(network)
