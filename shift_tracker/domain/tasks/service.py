"""Task service - Business logic for checklist tasks"""

import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ...exceptions import NotFoundError, ValidationError
from ...models import Task, TaskStatus
from .repository import TaskRepository

logger = logging.getLogger(__name__)

# pending is the initial state only, never a target of an update
UPDATABLE_STATUSES = {TaskStatus.COMPLETED.value, TaskStatus.NOT_COMPLETED.value}


class TaskService:
    """Service layer for task business logic"""

    def __init__(self, db: Session, now_fn: Optional[Callable[[], datetime]] = None):
        self.db = db
        self.repo = TaskRepository()
        self.now_fn = now_fn or datetime.now

    def get_task(self, task_id: int) -> Task:
        """Get a specific task"""
        task = self.repo.get_task_by_id(self.db, task_id)
        if not task:
            logger.warning(f"⚠️ Task {task_id} not found")
            raise NotFoundError("Task not found")
        return task

    def update_status(self, task_id: int, status: str, reason: Optional[str] = None) -> Task:
        """
        Mark a task completed or not completed.

        not_completed requires a non-blank reason. completed stamps
        completed_at with the current time and drops any previous reason.
        Moving back and forth between the two is allowed.
        """
        logger.info(f"📝 Updating task {task_id} status to {status}")

        if status not in UPDATABLE_STATUSES:
            raise ValidationError(f"Invalid status: {status}. Must be completed or not_completed")

        new_status = TaskStatus(status)
        if new_status == TaskStatus.NOT_COMPLETED:
            if reason is None or not reason.strip():
                raise ValidationError("Reason is required when status is not_completed")
            reason = reason.strip()
            completed_at = None
        else:
            reason = None
            completed_at = self.now_fn()

        task = self.get_task(task_id)
        task = self.repo.update_status(self.db, task, new_status, reason, completed_at)

        logger.info(f"✅ Task {task_id} marked {new_status.value}")
        return task
