"""Schedule domain schemas - Pydantic models for validation"""

from datetime import date as date_type
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ...models import ScheduleStatus
from ..clients.schemas import ClientResponse
from ..tasks.schemas import TaskCreate, TaskResponse
from ..visits.schemas import VisitResponse


class ScheduleFilter(BaseModel):
    caregiver_id: Optional[int] = None
    date: Optional[date_type] = None
    status: Optional[ScheduleStatus] = None
    limit: Optional[int] = Field(None, ge=0)
    offset: Optional[int] = Field(None, ge=0)


class ScheduleCreate(BaseModel):
    """Schema for booking a new schedule, optionally with its checklist"""

    client_id: int
    caregiver_id: int
    service_name: Optional[str] = None
    start_time: datetime
    end_time: datetime
    notes: Optional[str] = None
    tasks: list[TaskCreate] = Field(default_factory=list)


class ScheduleResponse(BaseModel):
    """Schedule enriched with client, visit and checklist"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    client_id: int
    caregiver_id: int
    service_name: Optional[str] = None
    start_time: datetime
    end_time: datetime
    status: ScheduleStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    client: Optional[ClientResponse] = None
    visit: Optional[VisitResponse] = None
    tasks: list[TaskResponse] = Field(default_factory=list)


class ScheduleStats(BaseModel):
    total: int
    missed: int
    upcoming: int
    completed: int
