from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from freezegun import freeze_time

from shift_tracker.domain.schedules.service import ScheduleService
from shift_tracker.domain.visits.lifecycle import VisitLifecycleEngine, derive_display_status
from shift_tracker.models import ScheduleStatus

NOW = datetime(2025, 3, 10, 12, 0)


def _schedule(start: datetime, end: datetime):
    return SimpleNamespace(start_time=start, end_time=end)


def _visit(status: str, start_time=None):
    return SimpleNamespace(status=status, start_time=start_time)


@pytest.mark.parametrize(
    "visit,expected",
    [
        (_visit("completed", NOW), ScheduleStatus.COMPLETED),
        (_visit("in_progress", NOW), ScheduleStatus.IN_PROGRESS),
        (_visit("not_started"), ScheduleStatus.MISSED),
        (None, ScheduleStatus.MISSED),
    ],
)
def test_derive_after_window(visit, expected):
    schedule = _schedule(NOW - timedelta(hours=3), NOW - timedelta(hours=1))
    assert derive_display_status(schedule, visit, NOW) == expected


def test_derive_before_end_is_scheduled():
    schedule = _schedule(NOW - timedelta(hours=1), NOW + timedelta(hours=1))
    assert derive_display_status(schedule, _visit("not_started"), NOW) == ScheduleStatus.SCHEDULED


def test_derive_at_exact_end_is_not_missed():
    schedule = _schedule(NOW - timedelta(hours=2), NOW)
    assert derive_display_status(schedule, None, NOW) == ScheduleStatus.SCHEDULED


def test_derive_ignores_persisted_status():
    schedule = SimpleNamespace(
        start_time=NOW + timedelta(hours=1), end_time=NOW + timedelta(hours=2), status="missed"
    )
    assert derive_display_status(schedule, None, NOW) == ScheduleStatus.SCHEDULED


@freeze_time(NOW)
def test_today_view_derives_missed_while_by_id_keeps_persisted(db, make_schedule):
    schedule = make_schedule(start=NOW - timedelta(hours=3), duration=timedelta(hours=1))
    service = ScheduleService(db)

    today = service.get_today_schedules(caregiver_id=1)
    by_id = service.get_schedule(schedule.id)

    assert [s.status for s in today] == [ScheduleStatus.MISSED]
    assert by_id.status == ScheduleStatus.SCHEDULED

    db.refresh(schedule)
    assert schedule.status == "scheduled"


@freeze_time(NOW)
def test_today_view_reflects_started_visit(db, make_schedule):
    schedule = make_schedule(start=NOW - timedelta(hours=3), duration=timedelta(hours=1))
    VisitLifecycleEngine(db).start(schedule.id, 0.0, 0.0)

    today = ScheduleService(db).get_today_schedules(caregiver_id=1)

    assert today[0].status == ScheduleStatus.IN_PROGRESS


@freeze_time(NOW)
def test_today_view_only_lists_caregivers_schedules_for_today(db, make_schedule):
    todays = make_schedule(start=NOW + timedelta(hours=1))
    make_schedule(start=NOW + timedelta(days=1))
    make_schedule(start=NOW - timedelta(days=1))
    make_schedule(start=NOW + timedelta(hours=2), caregiver_id=2)

    today = ScheduleService(db).get_today_schedules(caregiver_id=1)

    assert [s.id for s in today] == [todays.id]
    assert today[0].client.name == "John Smith"
