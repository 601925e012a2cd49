"""Schedule service - read-side enrichment, dashboard status and booking"""

import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ...exceptions import NotFoundError, ValidationError
from ...models import Schedule, ScheduleStatus, Visit
from ...shared.validators import to_local_naive
from ..clients.repository import ClientRepository
from ..visits.lifecycle import derive_display_status
from ..visits.repository import VisitRepository
from .repository import ScheduleRepository
from .schemas import ScheduleCreate, ScheduleFilter, ScheduleResponse, ScheduleStats

logger = logging.getLogger(__name__)


class ScheduleService:
    """Service layer for schedule queries"""

    def __init__(self, db: Session, now_fn: Optional[Callable[[], datetime]] = None):
        self.db = db
        self.repo = ScheduleRepository()
        self.client_repo = ClientRepository()
        self.visit_repo = VisitRepository()
        self.now_fn = now_fn or datetime.now

    def list_schedules(self, filters: Optional[ScheduleFilter] = None) -> list[ScheduleResponse]:
        """Filtered list; statuses are returned as persisted"""
        schedules = self.repo.get_schedules(self.db, filters)
        logger.debug(f"Retrieved {len(schedules)} schedules")
        return [ScheduleResponse.model_validate(s) for s in schedules]

    def get_schedule(self, schedule_id: int) -> ScheduleResponse:
        """Single schedule with visit and tasks; status is returned as persisted"""
        schedule = self.repo.get_schedule_by_id(self.db, schedule_id)
        if not schedule:
            logger.warning(f"⚠️ Schedule {schedule_id} not found")
            raise NotFoundError("Schedule not found")
        return ScheduleResponse.model_validate(schedule)

    def get_today_schedules(self, caregiver_id: int) -> list[ScheduleResponse]:
        """
        Today's dashboard for a caregiver.

        Unlike the other reads, each status is recomputed from the visit and the
        clock so missed and in-progress visits show live. Nothing is written back.
        """
        now = self.now_fn()
        schedules = self.repo.get_today_schedules(self.db, caregiver_id, now.date())

        results = []
        for schedule in schedules:
            display_status = derive_display_status(schedule, schedule.visit, now)
            response = ScheduleResponse.model_validate(schedule)
            results.append(response.model_copy(update={"status": display_status}))

        logger.debug(f"Retrieved {len(results)} schedules for caregiver {caregiver_id} today")
        return results

    def get_stats(self, caregiver_id: int) -> ScheduleStats:
        stats = self.repo.get_stats(self.db, caregiver_id, self.now_fn().date())
        return ScheduleStats(**stats)

    def create_schedule(self, data: ScheduleCreate) -> Schedule:
        """Book a schedule for an existing client"""
        logger.info(f"📅 Creating schedule for client {data.client_id}, caregiver {data.caregiver_id}")

        start_time = to_local_naive(data.start_time)
        end_time = to_local_naive(data.end_time)
        if end_time <= start_time:
            raise ValidationError("end_time must be after start_time")

        client = self.client_repo.get_client_by_id(self.db, data.client_id)
        if not client:
            raise NotFoundError("Client not found")

        tasks = []
        for task in data.tasks:
            if not task.title or not task.title.strip():
                raise ValidationError("Task title is required")
            tasks.append({"title": task.title.strip(), "description": task.description})

        return self.repo.create_schedule(
            self.db,
            tasks=tasks,
            client_id=data.client_id,
            caregiver_id=data.caregiver_id,
            service_name=data.service_name,
            start_time=start_time,
            end_time=end_time,
            notes=data.notes,
            status=ScheduleStatus.SCHEDULED.value,
        )

    def get_visit(self, schedule_id: int) -> Visit:
        visit = self.visit_repo.get_by_schedule_id(self.db, schedule_id)
        if not visit:
            raise NotFoundError("Visit not found")
        return visit
