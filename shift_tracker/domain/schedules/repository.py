"""Schedule repository - Database operations for schedules"""

from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy import and_, case, func
from sqlalchemy.orm import Session, joinedload

from ...models import Schedule, ScheduleStatus, Task
from ...shared.retry import retry_status_write
from .schemas import ScheduleFilter


def _day_bounds(day: date) -> tuple[datetime, datetime]:
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


class ScheduleRepository:
    """Repository for schedule database operations"""

    @staticmethod
    def get_schedules(db: Session, filters: Optional[ScheduleFilter] = None) -> list[Schedule]:
        """Get schedules with optional caregiver/date/status filtering and pagination"""
        query = db.query(Schedule).options(joinedload(Schedule.client))

        if filters is not None:
            if filters.caregiver_id is not None:
                query = query.filter(Schedule.caregiver_id == filters.caregiver_id)
            if filters.date is not None:
                day_start, day_end = _day_bounds(filters.date)
                query = query.filter(Schedule.start_time >= day_start, Schedule.start_time < day_end)
            if filters.status is not None:
                query = query.filter(Schedule.status == filters.status.value)

        query = query.order_by(Schedule.start_time.asc(), Schedule.id.asc())

        if filters is not None:
            if filters.limit is not None:
                query = query.limit(filters.limit)
            if filters.offset is not None:
                query = query.offset(filters.offset)

        return query.all()

    @staticmethod
    def get_schedule_by_id(db: Session, schedule_id: int) -> Optional[Schedule]:
        """Get a specific schedule by ID"""
        return (
            db.query(Schedule)
            .options(joinedload(Schedule.client))
            .filter(Schedule.id == schedule_id)
            .first()
        )

    @staticmethod
    def get_today_schedules(db: Session, caregiver_id: int, today: date) -> list[Schedule]:
        """Get a caregiver's schedules starting on the given day"""
        return ScheduleRepository.get_schedules(
            db, ScheduleFilter(caregiver_id=caregiver_id, date=today)
        )

    @staticmethod
    def get_stats(db: Session, caregiver_id: int, today: date) -> dict:
        """
        Aggregate counts for the caregiver dashboard.

        upcoming/completed only count schedules starting today; missed and
        total span all dates.
        """
        day_start, day_end = _day_bounds(today)
        is_today = and_(Schedule.start_time >= day_start, Schedule.start_time < day_end)

        row = (
            db.query(
                func.count(Schedule.id),
                func.sum(case((Schedule.status == ScheduleStatus.MISSED.value, 1), else_=0)),
                func.sum(
                    case((and_(Schedule.status == ScheduleStatus.SCHEDULED.value, is_today), 1), else_=0)
                ),
                func.sum(
                    case((and_(Schedule.status == ScheduleStatus.COMPLETED.value, is_today), 1), else_=0)
                ),
            )
            .filter(Schedule.caregiver_id == caregiver_id)
            .one()
        )

        total, missed, upcoming, completed = row
        return {
            "total": int(total or 0),
            "missed": int(missed or 0),
            "upcoming": int(upcoming or 0),
            "completed": int(completed or 0),
        }

    @staticmethod
    def create_schedule(db: Session, tasks: Optional[list[dict]] = None, **schedule_data) -> Schedule:
        """Create a schedule together with its initial checklist"""
        schedule = Schedule(**schedule_data)
        for task_data in tasks or []:
            schedule.tasks.append(Task(**task_data))
        db.add(schedule)
        db.commit()
        db.refresh(schedule)
        return schedule

    @staticmethod
    @retry_status_write
    def update_status(db: Session, schedule: Schedule, status: ScheduleStatus) -> Schedule:
        """Persist a schedule status transition"""
        schedule.status = status.value
        db.commit()
        db.refresh(schedule)
        return schedule

    @staticmethod
    def count_for_client(db: Session, client_id: int) -> int:
        return (
            db.query(func.count(Schedule.id)).filter(Schedule.client_id == client_id).scalar() or 0
        )
