"""
Visit router - check-in, check-out and cancel endpoints

Lifecycle routes live under /schedules/{id}/... because callers address a visit
through its schedule; the visit row may not exist until the first start.
"""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...config import EARLY_START_GRACE_MINUTES
from ...database import get_db
from ..schedules.router import get_schedule_service
from ..schedules.schemas import ScheduleResponse
from ..schedules.service import ScheduleService
from .lifecycle import VisitLifecycleEngine
from .schemas import EndVisitRequest, StartVisitRequest, VisitResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Visits"])


def get_lifecycle_engine(db: Session = Depends(get_db)) -> VisitLifecycleEngine:
    """Dependency injection for the lifecycle engine"""
    return VisitLifecycleEngine(
        db,
        logger=logging.getLogger("shift_tracker.lifecycle"),
        early_start_grace=timedelta(minutes=EARLY_START_GRACE_MINUTES),
    )


@router.post("/schedules/{schedule_id}/start")
def start_visit(
    schedule_id: int,
    data: StartVisitRequest,
    engine: VisitLifecycleEngine = Depends(get_lifecycle_engine),
):
    """Check in to a scheduled visit with the caregiver's location"""
    visit = engine.start(schedule_id, data.start_latitude, data.start_longitude)
    return {
        "success": True,
        "message": "Visit started successfully",
        "data": VisitResponse.model_validate(visit),
    }


@router.post("/schedules/{schedule_id}/end")
def end_visit(
    schedule_id: int,
    data: EndVisitRequest,
    engine: VisitLifecycleEngine = Depends(get_lifecycle_engine),
):
    """Check out of a started visit"""
    visit = engine.end(schedule_id, data.end_latitude, data.end_longitude, data.notes)
    return {
        "success": True,
        "message": "Visit ended successfully",
        "data": VisitResponse.model_validate(visit),
    }


@router.post("/schedules/{schedule_id}/cancel")
def cancel_visit(
    schedule_id: int,
    engine: VisitLifecycleEngine = Depends(get_lifecycle_engine),
):
    """Undo a check-in, returning the schedule to scheduled"""
    schedule = engine.cancel(schedule_id)
    return {
        "success": True,
        "message": "Visit cancelled successfully",
        "data": ScheduleResponse.model_validate(schedule),
    }


@router.get("/visits/schedule/{schedule_id}")
def get_visit_by_schedule(
    schedule_id: int,
    service: ScheduleService = Depends(get_schedule_service),
):
    """Get the visit record for a schedule"""
    visit = service.get_visit(schedule_id)
    return {"success": True, "data": VisitResponse.model_validate(visit)}
