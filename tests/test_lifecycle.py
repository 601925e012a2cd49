from datetime import datetime, timedelta

import pytest

from shift_tracker.domain.visits.lifecycle import VisitLifecycleEngine
from shift_tracker.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    NotStartedError,
    TooEarlyError,
    ValidationError,
)

START = datetime(2025, 3, 10, 9, 0)


class Clock:
    """Settable now_fn for the lifecycle engine"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def clock():
    return Clock(START)


@pytest.fixture()
def lifecycle(db, clock):
    return VisitLifecycleEngine(db, now_fn=clock)


def test_start_moves_schedule_and_visit_in_progress(db, lifecycle, clock, make_schedule):
    schedule = make_schedule(start=START)
    clock.now = START + timedelta(minutes=5)

    visit = lifecycle.start(schedule.id, 40.7128, -74.0060)

    assert visit.status == "in_progress"
    assert visit.start_time == START + timedelta(minutes=5)
    assert (visit.start_latitude, visit.start_longitude) == (40.7128, -74.0060)
    db.refresh(schedule)
    assert schedule.status == "in_progress"


def test_start_creates_visit_when_missing(db, lifecycle, make_schedule):
    schedule = make_schedule(start=START, with_visit=False)

    visit = lifecycle.start(schedule.id, 10.0, 20.0)

    assert visit.id is not None
    assert visit.schedule_id == schedule.id
    assert visit.status == "in_progress"


def test_start_allowed_exactly_at_grace_boundary(lifecycle, clock, make_schedule):
    schedule = make_schedule(start=START)
    clock.now = START - timedelta(minutes=30)

    visit = lifecycle.start(schedule.id, 0.0, 0.0)

    assert visit.status == "in_progress"


def test_start_rejected_before_grace_window(db, lifecycle, clock, make_schedule):
    schedule = make_schedule(start=START)
    clock.now = START - timedelta(minutes=30, seconds=1)

    with pytest.raises(TooEarlyError):
        lifecycle.start(schedule.id, 0.0, 0.0)

    db.refresh(schedule)
    assert schedule.status == "scheduled"
    assert schedule.visit.status == "not_started"
    assert schedule.visit.start_time is None


def test_custom_grace_is_honoured(db, clock, make_schedule):
    schedule = make_schedule(start=START)
    clock.now = START - timedelta(minutes=10)
    strict = VisitLifecycleEngine(db, now_fn=clock, early_start_grace=timedelta(minutes=5))

    with pytest.raises(TooEarlyError, match="5 minutes"):
        strict.start(schedule.id, 0.0, 0.0)


def test_start_after_scheduled_end_is_allowed(lifecycle, clock, make_schedule):
    schedule = make_schedule(start=START)
    clock.now = START + timedelta(hours=5)

    assert lifecycle.start(schedule.id, 0.0, 0.0).status == "in_progress"


def test_start_unknown_schedule(lifecycle):
    with pytest.raises(NotFoundError):
        lifecycle.start(9999, 0.0, 0.0)


@pytest.mark.parametrize(
    "lat,lon",
    [(90.0, 180.0), (-90.0, -180.0), (0.0, 0.0)],
)
def test_start_accepts_coordinate_boundaries(lifecycle, make_schedule, lat, lon):
    schedule = make_schedule(start=START)

    visit = lifecycle.start(schedule.id, lat, lon)

    assert (visit.start_latitude, visit.start_longitude) == (lat, lon)


@pytest.mark.parametrize(
    "lat,lon",
    [(90.0001, 0.0), (-90.0001, 0.0), (0.0, 180.0001), (0.0, -180.0001), (91.0, 181.0)],
)
def test_start_rejects_out_of_range_coordinates(db, lifecycle, make_schedule, lat, lon):
    schedule = make_schedule(start=START)

    with pytest.raises(ValidationError):
        lifecycle.start(schedule.id, lat, lon)

    db.refresh(schedule)
    assert schedule.status == "scheduled"


def test_coordinates_checked_before_schedule_lookup(lifecycle):
    with pytest.raises(ValidationError):
        lifecycle.start(9999, 100.0, 0.0)


def test_end_completes_visit(db, lifecycle, clock, make_schedule):
    schedule = make_schedule(start=START)
    lifecycle.start(schedule.id, 1.0, 2.0)
    clock.now = START + timedelta(hours=2)

    visit = lifecycle.end(schedule.id, 3.0, 4.0, notes="All tasks done")

    assert visit.status == "completed"
    assert visit.end_time == START + timedelta(hours=2)
    assert (visit.end_latitude, visit.end_longitude) == (3.0, 4.0)
    assert visit.notes == "All tasks done"
    db.refresh(schedule)
    assert schedule.status == "completed"


def test_end_without_notes_keeps_existing_notes(db, lifecycle, clock, make_schedule):
    schedule = make_schedule(start=START)
    lifecycle.start(schedule.id, 1.0, 2.0)
    visit = schedule.visit
    visit.notes = "Client was tired"
    db.commit()

    ended = lifecycle.end(schedule.id, 1.0, 2.0, notes="")

    assert ended.notes == "Client was tired"


def test_end_without_start_is_rejected(db, lifecycle, make_schedule):
    schedule = make_schedule(start=START)

    with pytest.raises(NotStartedError):
        lifecycle.end(schedule.id, 0.0, 0.0)

    db.refresh(schedule)
    assert schedule.status == "scheduled"


def test_end_without_visit_row_is_rejected(lifecycle, make_schedule):
    schedule = make_schedule(start=START, with_visit=False)

    with pytest.raises(NotStartedError):
        lifecycle.end(schedule.id, 0.0, 0.0)


def test_end_before_start_time_is_rejected(lifecycle, clock, make_schedule):
    schedule = make_schedule(start=START)
    lifecycle.start(schedule.id, 0.0, 0.0)
    clock.now = START - timedelta(minutes=1)

    with pytest.raises(ValidationError):
        lifecycle.end(schedule.id, 0.0, 0.0)


def test_end_rejects_out_of_range_coordinates(lifecycle, make_schedule):
    schedule = make_schedule(start=START)
    lifecycle.start(schedule.id, 0.0, 0.0)

    with pytest.raises(ValidationError):
        lifecycle.end(schedule.id, 0.0, 200.0)


def test_cancel_in_progress_resets_visit(db, lifecycle, make_schedule):
    schedule = make_schedule(start=START)
    lifecycle.start(schedule.id, 5.0, 6.0)

    cancelled = lifecycle.cancel(schedule.id)

    assert cancelled.status == "scheduled"
    visit = cancelled.visit
    assert visit.status == "not_started"
    assert visit.start_time is None
    assert visit.end_time is None
    assert visit.start_latitude is None
    assert visit.start_longitude is None
    assert visit.end_latitude is None
    assert visit.end_longitude is None
    assert visit.notes is None


def test_cancel_scheduled_is_a_noop(db, lifecycle, make_schedule):
    schedule = make_schedule(start=START)

    cancelled = lifecycle.cancel(schedule.id)

    assert cancelled.status == "scheduled"
    assert cancelled.visit.status == "not_started"


def test_cancel_completed_is_rejected(db, lifecycle, clock, make_schedule):
    schedule = make_schedule(start=START)
    lifecycle.start(schedule.id, 0.0, 0.0)
    clock.now = START + timedelta(hours=1)
    lifecycle.end(schedule.id, 0.0, 0.0)

    with pytest.raises(InvalidTransitionError):
        lifecycle.cancel(schedule.id)

    db.refresh(schedule)
    assert schedule.status == "completed"
    assert schedule.visit.status == "completed"


def test_cancel_missed_is_rejected(lifecycle, make_schedule):
    schedule = make_schedule(start=START, status="missed")

    with pytest.raises(InvalidTransitionError):
        lifecycle.cancel(schedule.id)


def test_cancel_unknown_schedule(lifecycle):
    with pytest.raises(NotFoundError):
        lifecycle.cancel(9999)


def test_full_visit_cycle_with_restart(db, lifecycle, clock, make_schedule):
    schedule = make_schedule(start=START)

    lifecycle.start(schedule.id, 1.0, 1.0)
    lifecycle.cancel(schedule.id)
    clock.now = START + timedelta(minutes=15)
    restarted = lifecycle.start(schedule.id, 2.0, 2.0)

    assert restarted.start_time == START + timedelta(minutes=15)
    assert restarted.start_latitude == 2.0

    clock.now = START + timedelta(hours=2)
    lifecycle.end(schedule.id, 2.0, 2.0)
    db.refresh(schedule)
    assert schedule.status == "completed"


def test_documented_visit_scenario(db, lifecycle, clock, make_schedule):
    schedule = make_schedule(start=START, duration=timedelta(hours=2))

    clock.now = START - timedelta(minutes=10)
    visit = lifecycle.start(schedule.id, 40.7128, -74.0060)
    db.refresh(schedule)
    assert (visit.status, schedule.status) == ("in_progress", "in_progress")

    clock.now = START + timedelta(hours=1)
    visit = lifecycle.end(schedule.id, 40.7128, -74.0060, notes="done")
    db.refresh(schedule)
    assert (visit.status, schedule.status) == ("completed", "completed")

    with pytest.raises(InvalidTransitionError):
        lifecycle.cancel(schedule.id)


def test_start_two_hours_early_is_rejected(lifecycle, clock, make_schedule):
    schedule = make_schedule(start=START)
    clock.now = START - timedelta(hours=2)

    with pytest.raises(TooEarlyError):
        lifecycle.start(schedule.id, 40.7128, -74.0060)
