"""Schedule router - FastAPI endpoints for schedules and the caregiver dashboard"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import ScheduleStatus
from .schemas import ScheduleCreate, ScheduleFilter, ScheduleResponse
from .service import ScheduleService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedules", tags=["Schedules"])


def get_schedule_service(db: Session = Depends(get_db)) -> ScheduleService:
    """Dependency injection for ScheduleService"""
    return ScheduleService(db)


@router.get("")
def get_schedules(
    caregiver_id: Optional[int] = Query(None),
    day: Optional[date] = Query(None, alias="date", description="YYYY-MM-DD"),
    status: Optional[ScheduleStatus] = Query(None),
    limit: Optional[int] = Query(None, ge=0),
    offset: Optional[int] = Query(None, ge=0),
    service: ScheduleService = Depends(get_schedule_service),
):
    """List schedules with optional filtering"""
    filters = ScheduleFilter(
        caregiver_id=caregiver_id, date=day, status=status, limit=limit, offset=offset
    )
    return {"success": True, "data": service.list_schedules(filters)}


@router.post("", status_code=201)
def create_schedule(
    data: ScheduleCreate,
    service: ScheduleService = Depends(get_schedule_service),
):
    """Book a new schedule, optionally with its task checklist"""
    schedule = service.create_schedule(data)
    return {"success": True, "data": ScheduleResponse.model_validate(schedule)}


@router.get("/today")
def get_today_schedules(
    caregiver_id: int = Query(...),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Today's schedules for a caregiver with live (derived) status"""
    return {"success": True, "data": service.get_today_schedules(caregiver_id)}


@router.get("/stats")
def get_schedule_stats(
    caregiver_id: int = Query(...),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Dashboard counters for a caregiver"""
    return {"success": True, "data": service.get_stats(caregiver_id)}


@router.get("/{schedule_id}")
def get_schedule(
    schedule_id: int,
    service: ScheduleService = Depends(get_schedule_service),
):
    """Get a schedule with its client, visit and tasks"""
    return {"success": True, "data": service.get_schedule(schedule_id)}
