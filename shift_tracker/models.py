"""
ORM models for the caregiver shift tracker

Schedule  - planned caregiver-to-client appointment
Visit     - what actually happened (check-in/check-out with geolocation), 1:1 with Schedule
Task      - checklist item for a schedule
Client    - person receiving care
"""

from enum import Enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class ScheduleStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    MISSED = "missed"


class VisitStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    NOT_COMPLETED = "not_completed"


def _in_check(column: str, enum_cls: type[Enum]) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum_cls)
    return f"{column} IN ({values})"


class Client(Base):
    """Client receiving in-home care"""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)

    # Address
    address = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    zip_code = Column(String(20), nullable=False)
    latitude = Column(Float, default=0, nullable=False)
    longitude = Column(Float, default=0, nullable=False)

    notes = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    schedules = relationship("Schedule", back_populates="client")


class Schedule(Base):
    """Planned appointment between a caregiver and a client"""

    __tablename__ = "schedules"
    __table_args__ = (CheckConstraint(_in_check("status", ScheduleStatus), name="ck_schedule_status"),)

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    caregiver_id = Column(Integer, nullable=False, index=True)
    service_name = Column(String(255), nullable=True)

    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)

    # scheduled → in_progress → completed; missed is only ever derived or set by seed data
    status = Column(String(20), default=ScheduleStatus.SCHEDULED.value, nullable=False, index=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    client = relationship("Client", back_populates="schedules")
    visit = relationship("Visit", back_populates="schedule", uselist=False, cascade="all, delete-orphan")
    tasks = relationship(
        "Task", back_populates="schedule", order_by="Task.id", cascade="all, delete-orphan"
    )


class Visit(Base):
    """Check-in/check-out record for a schedule"""

    __tablename__ = "visits"
    __table_args__ = (CheckConstraint(_in_check("status", VisitStatus), name="ck_visit_status"),)

    id = Column(Integer, primary_key=True, index=True)
    schedule_id = Column(
        Integer, ForeignKey("schedules.id", ondelete="CASCADE"), nullable=False, unique=True
    )

    start_time = Column(DateTime, nullable=True)
    end_time = Column(DateTime, nullable=True)
    start_latitude = Column(Float, nullable=True)
    start_longitude = Column(Float, nullable=True)
    end_latitude = Column(Float, nullable=True)
    end_longitude = Column(Float, nullable=True)

    status = Column(String(20), default=VisitStatus.NOT_STARTED.value, nullable=False)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    schedule = relationship("Schedule", back_populates="visit")


class Task(Base):
    """Care activity to be performed during a visit"""

    __tablename__ = "tasks"
    __table_args__ = (CheckConstraint(_in_check("status", TaskStatus), name="ck_task_status"),)

    id = Column(Integer, primary_key=True, index=True)
    schedule_id = Column(
        Integer, ForeignKey("schedules.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    status = Column(String(20), default=TaskStatus.PENDING.value, nullable=False)
    reason = Column(Text, nullable=True)  # required when status is not_completed
    completed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    schedule = relationship("Schedule", back_populates="tasks")
