"""
Auto-checkout routes (managers)
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from frontdesk.database import get_db
from frontdesk.models.schemas import SweepResponse
from frontdesk.scheduler.base import SchedulerRegistry
from frontdesk.services.auto_checkout_service import AUTO_CHECKOUT_JOB_ID, AutoCheckoutService
from frontdesk.security.auth import SessionContext, require_manager

router = APIRouter(prefix="/auto-checkout", tags=["Auto-checkout"])


@router.post("/run", response_model=SweepResponse)
def run_sweep(
    db: Session = Depends(get_db),
    current: SessionContext = Depends(require_manager)
):
    """Run the expired-booking sweep now

    With the scheduler running this fires the scheduled job itself;
    otherwise the sweep runs on the request session.
    """
    backend = SchedulerRegistry().get_backend()
    if backend is not None:
        result = backend.run_now(AUTO_CHECKOUT_JOB_ID)
    else:
        result = AutoCheckoutService(db).sweep()
    return SweepResponse(
        ran_at=result.ran_at,
        completed_booking_ids=result.completed_booking_ids,
        released_room_ids=result.released_room_ids,
        error=result.error,
    )


@router.get("/jobs", response_model=List[dict])
def list_jobs(current: SessionContext = Depends(require_manager)):
    backend = SchedulerRegistry().get_backend()
    if backend is None:
        return []
    return backend.get_jobs()
