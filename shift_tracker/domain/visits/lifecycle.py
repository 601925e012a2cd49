"""
Visit lifecycle engine

State machine over (Schedule.status, Visit.status):

    start   scheduled/any   → schedule in_progress, visit in_progress (visit created lazily)
    end     visit started   → schedule completed,   visit completed
    cancel  scheduled       → scheduled (visit untouched)
            in_progress     → scheduled, visit reset to not_started with every field cleared
            completed/missed→ rejected

Each operation is a read-then-write sequence against the repositories with no
in-process locking; concurrent calls on the same schedule are last-writer-wins.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ...config import EARLY_START_GRACE_MINUTES
from ...exceptions import (
    InvalidTransitionError,
    NotFoundError,
    NotStartedError,
    TooEarlyError,
    ValidationError,
)
from ...models import Schedule, ScheduleStatus, Visit, VisitStatus
from ...shared.validators import validate_coordinates
from ..schedules.repository import ScheduleRepository
from .repository import VisitRepository

NowFn = Callable[[], datetime]

CANCELLABLE_STATUSES = {ScheduleStatus.SCHEDULED.value, ScheduleStatus.IN_PROGRESS.value}


def _local_now() -> datetime:
    return datetime.now()


def derive_display_status(
    schedule: Schedule, visit: Optional[Visit], now: datetime
) -> ScheduleStatus:
    """
    Reconcile a schedule's nominal status with what its visit shows.

    Read-only: used by the today dashboard; by-id and filtered reads keep the
    persisted status.
    """
    if visit is not None and visit.status == VisitStatus.COMPLETED.value:
        return ScheduleStatus.COMPLETED
    if visit is not None and visit.status == VisitStatus.IN_PROGRESS.value:
        return ScheduleStatus.IN_PROGRESS
    if now > schedule.end_time and (visit is None or visit.start_time is None):
        return ScheduleStatus.MISSED
    return ScheduleStatus.SCHEDULED


class VisitLifecycleEngine:
    """Start/end/cancel transitions for a schedule's visit"""

    def __init__(
        self,
        db: Session,
        *,
        logger: Optional[logging.Logger] = None,
        now_fn: Optional[NowFn] = None,
        early_start_grace: timedelta = timedelta(minutes=EARLY_START_GRACE_MINUTES),
        schedule_repo: Optional[ScheduleRepository] = None,
        visit_repo: Optional[VisitRepository] = None,
    ):
        self.db = db
        self.logger = logger or logging.getLogger(__name__)
        self.now_fn = now_fn or _local_now
        self.early_start_grace = early_start_grace
        self.schedule_repo = schedule_repo or ScheduleRepository()
        self.visit_repo = visit_repo or VisitRepository()

    def _get_schedule(self, schedule_id: int) -> Schedule:
        schedule = self.schedule_repo.get_schedule_by_id(self.db, schedule_id)
        if not schedule:
            self.logger.warning(f"⚠️ Schedule {schedule_id} not found")
            raise NotFoundError("Schedule not found")
        return schedule

    def start(self, schedule_id: int, latitude: float, longitude: float) -> Visit:
        """Check in: record start time and location, move schedule to in_progress"""
        validate_coordinates(latitude, longitude)
        self.logger.info(f"▶️ Starting visit for schedule {schedule_id} at ({latitude}, {longitude})")

        schedule = self._get_schedule(schedule_id)

        now = self.now_fn()
        earliest = schedule.start_time - self.early_start_grace
        if now < earliest:
            self.logger.warning(
                f"⚠️ Schedule {schedule_id} start rejected: {now.isoformat()} is before {earliest.isoformat()}"
            )
            minutes = int(self.early_start_grace.total_seconds() // 60)
            raise TooEarlyError(
                f"Cannot start visit more than {minutes} minutes before scheduled time"
            )

        visit_fields = {
            "start_time": now,
            "start_latitude": latitude,
            "start_longitude": longitude,
            "status": VisitStatus.IN_PROGRESS.value,
        }
        visit = self.visit_repo.get_by_schedule_id(self.db, schedule_id)
        if visit is None:
            visit = self.visit_repo.create_visit(self.db, schedule_id, **visit_fields)
        else:
            visit = self.visit_repo.update_visit(self.db, visit, **visit_fields)

        self.schedule_repo.update_status(self.db, schedule, ScheduleStatus.IN_PROGRESS)

        self.logger.info(f"✅ Visit started for schedule {schedule_id}")
        return visit

    def end(
        self,
        schedule_id: int,
        latitude: float,
        longitude: float,
        notes: Optional[str] = None,
    ) -> Visit:
        """Check out: record end time and location, move schedule to completed"""
        validate_coordinates(latitude, longitude)
        self.logger.info(f"⏹️ Ending visit for schedule {schedule_id} at ({latitude}, {longitude})")

        schedule = self._get_schedule(schedule_id)

        visit = self.visit_repo.get_by_schedule_id(self.db, schedule_id)
        if visit is None or visit.start_time is None:
            self.logger.warning(f"⚠️ Schedule {schedule_id} end rejected: visit was never started")
            raise NotStartedError("Cannot end a visit that hasn't been started")

        now = self.now_fn()
        if now < visit.start_time:
            raise ValidationError("Visit end time cannot be before its start time")

        updates = {
            "end_time": now,
            "end_latitude": latitude,
            "end_longitude": longitude,
            "status": VisitStatus.COMPLETED.value,
        }
        if notes:
            updates["notes"] = notes

        visit = self.visit_repo.update_visit(self.db, visit, **updates)
        self.schedule_repo.update_status(self.db, schedule, ScheduleStatus.COMPLETED)

        self.logger.info(f"✅ Visit ended for schedule {schedule_id}")
        return visit

    def cancel(self, schedule_id: int) -> Schedule:
        """Undo a check-in (or no-op on a scheduled visit); completed/missed are final"""
        self.logger.info(f"↩️ Cancelling visit for schedule {schedule_id}")

        schedule = self._get_schedule(schedule_id)

        if schedule.status not in CANCELLABLE_STATUSES:
            self.logger.warning(
                f"⚠️ Schedule {schedule_id} cannot be cancelled in status {schedule.status}"
            )
            raise InvalidTransitionError(f"Visit cannot be cancelled in status: {schedule.status}")

        if schedule.status == ScheduleStatus.IN_PROGRESS.value:
            visit = self.visit_repo.get_by_schedule_id(self.db, schedule_id)
            if visit is None:
                self.logger.warning(f"⚠️ Schedule {schedule_id} is in progress but has no visit record")
            else:
                self.visit_repo.update_visit(
                    self.db,
                    visit,
                    start_time=None,
                    end_time=None,
                    start_latitude=None,
                    start_longitude=None,
                    end_latitude=None,
                    end_longitude=None,
                    status=VisitStatus.NOT_STARTED.value,
                    notes=None,
                )

        schedule = self.schedule_repo.update_status(self.db, schedule, ScheduleStatus.SCHEDULED)

        self.logger.info(f"✅ Visit cancelled for schedule {schedule_id}")
        return schedule
