"""Task domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ...models import TaskStatus


class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = None


class TaskUpdateRequest(BaseModel):
    """
    Status change for a task.

    status is kept as a plain string so an unknown value reaches the service
    and is rejected there with the same error shape as a missing reason.
    """

    status: str
    reason: Optional[str] = None


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    schedule_id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    reason: Optional[str] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
