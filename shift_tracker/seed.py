"""
Sample data for local development

Schedules are placed relative to the current time so the caregiver dashboard
always has something to show: two upcoming visits today, one already missed
and one tomorrow.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from .models import Client, Schedule, ScheduleStatus, Task, Visit, VisitStatus

logger = logging.getLogger(__name__)

SAMPLE_CAREGIVER_ID = 1

SAMPLE_CLIENTS = [
    {
        "name": "John Smith",
        "email": "john.smith@email.com",
        "phone": "+44 1232 212 3233",
        "address": "123 Main St",
        "zip_code": "62701",
        "latitude": 39.7817,
        "longitude": -89.6501,
        "notes": "Regular client, prefers morning visits",
    },
    {
        "name": "Mary Johnson",
        "email": "mary.johnson@email.com",
        "phone": "+44 1232 212 3234",
        "address": "456 Oak Ave",
        "zip_code": "62702",
        "latitude": 39.7990,
        "longitude": -89.6440,
        "notes": "Needs medication assistance",
    },
    {
        "name": "Robert Brown",
        "email": "robert.brown@email.com",
        "phone": "+44 1232 212 3235",
        "address": "789 Pine Rd",
        "zip_code": "62703",
        "latitude": 39.7665,
        "longitude": -89.6808,
        "notes": "Companionship service client",
    },
    {
        "name": "Sarah Davis",
        "email": "sarah.davis@email.com",
        "phone": "+44 1232 212 3236",
        "address": "123 Main St",
        "zip_code": "62701",
        "latitude": 39.7817,
        "longitude": -89.6501,
        "notes": "Physical therapy client",
    },
]

# (client index, service, start offset, duration, status, notes, tasks)
SAMPLE_SCHEDULES = [
    (
        0,
        "Personal Care Service",
        timedelta(hours=1),
        timedelta(hours=2),
        ScheduleStatus.SCHEDULED,
        "Regular morning visit",
        [
            ("Give medication", "Administer morning medications as prescribed"),
            ("Check vital signs", "Take blood pressure and temperature"),
            ("Assist with bathing", "Help client with personal hygiene"),
        ],
    ),
    (
        1,
        "Medication Management",
        timedelta(hours=4),
        timedelta(hours=2),
        ScheduleStatus.SCHEDULED,
        "Afternoon medication assistance",
        [
            ("Prepare lunch", "Prepare and serve nutritious lunch"),
            ("Light housekeeping", "Tidy up living areas"),
        ],
    ),
    (
        2,
        "Companionship Service",
        timedelta(hours=-2),
        timedelta(hours=2),
        ScheduleStatus.MISSED,
        "Client was not home",
        [],
    ),
    (
        3,
        "Personal Care Service",
        timedelta(days=1, hours=2),
        timedelta(hours=2),
        ScheduleStatus.SCHEDULED,
        "Tomorrow morning visit",
        [
            ("Physical therapy exercises", "Guide client through prescribed exercises"),
            ("Medication review", "Review medication schedule with client"),
        ],
    ),
]


def seed_sample_data(db: Session, now: Optional[datetime] = None) -> bool:
    """Insert sample data into an empty database. Returns False if data already exists."""
    if db.query(Client).first() is not None:
        logger.info("ℹ️ Database already has clients, skipping sample data")
        return False

    now = now or datetime.now()

    clients = [
        Client(city="Springfield", state="IL", is_active=True, **data) for data in SAMPLE_CLIENTS
    ]
    db.add_all(clients)
    db.flush()

    for client_idx, service, offset, duration, status, notes, tasks in SAMPLE_SCHEDULES:
        start = now + offset
        schedule = Schedule(
            client_id=clients[client_idx].id,
            caregiver_id=SAMPLE_CAREGIVER_ID,
            service_name=service,
            start_time=start,
            end_time=start + duration,
            status=status.value,
            notes=notes,
        )
        schedule.visit = Visit(status=VisitStatus.NOT_STARTED.value)
        schedule.tasks = [Task(title=title, description=desc) for title, desc in tasks]
        db.add(schedule)

    db.commit()
    logger.info(f"🌱 Seeded {len(clients)} clients and {len(SAMPLE_SCHEDULES)} schedules")
    return True
