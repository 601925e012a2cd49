"""Task repository - Database operations for checklist tasks"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Task, TaskStatus
from ...shared.retry import retry_status_write


class TaskRepository:
    """Repository for task database operations"""

    @staticmethod
    def get_task_by_id(db: Session, task_id: int) -> Optional[Task]:
        return db.query(Task).filter(Task.id == task_id).first()

    @staticmethod
    def get_tasks_by_schedule_id(db: Session, schedule_id: int) -> list[Task]:
        return db.query(Task).filter(Task.schedule_id == schedule_id).order_by(Task.id.asc()).all()

    @staticmethod
    @retry_status_write
    def update_status(
        db: Session,
        task: Task,
        status: TaskStatus,
        reason: Optional[str],
        completed_at: Optional[datetime],
    ) -> Task:
        """Persist a task status change together with its reason and completion stamp"""
        task.status = status.value
        task.reason = reason
        task.completed_at = completed_at
        db.commit()
        db.refresh(task)
        return task
