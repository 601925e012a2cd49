"""Task router - FastAPI endpoints for checklist tasks"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import TaskResponse, TaskUpdateRequest
from .service import TaskService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["Tasks"])


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    """Dependency injection for TaskService"""
    return TaskService(db)


@router.get("/{task_id}")
def get_task(task_id: int, service: TaskService = Depends(get_task_service)):
    """Get a task by ID"""
    task = service.get_task(task_id)
    return {"success": True, "data": TaskResponse.model_validate(task)}


@router.put("/{task_id}")
def update_task_status(
    task_id: int,
    data: TaskUpdateRequest,
    service: TaskService = Depends(get_task_service),
):
    """Mark a task completed, or not completed with a reason"""
    task = service.update_status(task_id, data.status, data.reason)
    return {"success": True, "data": TaskResponse.model_validate(task)}
