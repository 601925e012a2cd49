# tests/conftest.py

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shift_tracker.database import Base, create_db_engine, get_db
from shift_tracker.main import app
from shift_tracker.models import Client, Schedule, Task, Visit, VisitStatus


@pytest.fixture()
def engine():
    """
    Fresh in-memory SQLite per test.

    StaticPool keeps a single connection so the schema survives across
    sessions and the TestClient's worker thread sees the same data.
    """
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def make_client(db):
    def _make(**overrides) -> Client:
        data = {
            "name": "John Smith",
            "email": "john.smith@email.com",
            "phone": "+44 1232 212 3233",
            "address": "123 Main St",
            "city": "Springfield",
            "state": "IL",
            "zip_code": "62701",
            "latitude": 39.7817,
            "longitude": -89.6501,
        }
        data.update(overrides)
        record = Client(**data)
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    return _make


@pytest.fixture()
def make_schedule(db, make_client):
    """
    Create a schedule for caregiver 1 starting at `start` (default: one hour from now).

    A not_started visit row is attached unless with_visit=False.
    """

    def _make(
        start: datetime = None,
        duration: timedelta = timedelta(hours=2),
        caregiver_id: int = 1,
        status: str = "scheduled",
        client: Client = None,
        tasks: tuple = (),
        with_visit: bool = True,
    ) -> Schedule:
        start = start or datetime.now() + timedelta(hours=1)
        client = client or make_client()
        schedule = Schedule(
            client_id=client.id,
            caregiver_id=caregiver_id,
            service_name="Personal Care Service",
            start_time=start,
            end_time=start + duration,
            status=status,
        )
        if with_visit:
            schedule.visit = Visit(status=VisitStatus.NOT_STARTED.value)
        schedule.tasks = [Task(title=title) for title in tasks]
        db.add(schedule)
        db.commit()
        db.refresh(schedule)
        return schedule

    return _make
