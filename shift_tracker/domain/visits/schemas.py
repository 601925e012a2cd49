"""Visit domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ...models import VisitStatus


class StartVisitRequest(BaseModel):
    """Check-in location; range is enforced by the lifecycle engine"""

    start_latitude: float
    start_longitude: float


class EndVisitRequest(BaseModel):
    end_latitude: float
    end_longitude: float
    notes: Optional[str] = None


class VisitResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    schedule_id: int
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    start_latitude: Optional[float] = None
    start_longitude: Optional[float] = None
    end_latitude: Optional[float] = None
    end_longitude: Optional[float] = None
    status: VisitStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
