from datetime import date

from conftest import GOLF, MONDAY, PADEL, TENNIS
from sportslot.models import Activities, SlotState, TimeSlots
from sportslot.services.schedule import lifecycle
from sportslot.services.schedule.config import DayHours, ScheduleConfiguration
from sportslot.services.schedule.generator import (
    WARNING_NO_ACTIVITIES,
    WARNING_NO_DATES,
    WARNING_NOTHING_CREATED,
    GenerationRequest,
    generate_slots,
    plan_day_times,
)

WEEK_START = date(2030, 1, 7)  # Monday
WEEK_END = date(2030, 1, 13)   # Sunday


def _only_monday_morning(set_hours):
    set_hours(
        (0, False, "09:00", "18:00"),
        (1, True, "09:00", "12:00"),
        *((dow, False, "09:00", "18:00") for dow in range(2, 7)),
    )


def test_week_with_single_open_morning(db, set_hours):
    _only_monday_morning(set_hours)

    report = generate_slots(db, GenerationRequest(
        start_date=WEEK_START,
        end_date=WEEK_END,
        activity_ids=[GOLF],
        duration_minutes=60,
    ))

    assert report.created_count == 3
    assert report.warnings == []
    slots = db.query(TimeSlots).order_by(TimeSlots.time).all()
    assert [(s.date, s.time) for s in slots] == [
        (MONDAY, "09:00"), (MONDAY, "10:00"), (MONDAY, "11:00"),
    ]
    assert all(s.state == SlotState.DRAFT for s in slots)
    assert all(s.max_capacity == 4 and s.price == 50 for s in slots)


def test_second_run_creates_nothing(db, set_hours):
    _only_monday_morning(set_hours)
    request = GenerationRequest(
        start_date=WEEK_START, end_date=WEEK_END, activity_ids=[GOLF, TENNIS],
    )

    first = generate_slots(db, request)
    second = generate_slots(db, request)

    assert first.created_count == 6
    assert second.created_count == 0
    assert second.warnings == [WARNING_NOTHING_CREATED]
    assert db.query(TimeSlots).count() == 6


def test_skips_closed_days(db):
    lifecycle.create_closure(db, date(2030, 1, 8), date(2030, 1, 9))

    report = generate_slots(db, GenerationRequest(
        start_date=WEEK_START, end_date=WEEK_END, activity_ids=[PADEL], duration_minutes=180,
    ))

    dates = {s.date for s in db.query(TimeSlots).all()}
    # Sunday off by default, Tue/Wed closed, 09:00-18:00 fits three 3h slots
    assert dates == {"2030-01-07", "2030-01-10", "2030-01-11", "2030-01-12"}
    assert report.created_count == 4 * 3


def test_lunch_break_is_skipped():
    config = ScheduleConfiguration(working_hours=(DayHours(1, True, "09:00", "15:00"),))
    times = plan_day_times(config, WEEK_START, 60, lunch_break=(12 * 60, 13 * 60))
    assert times == ["09:00", "10:00", "11:00", "13:00", "14:00"]


def test_does_not_overlap_existing_slot(db, make_slot, set_hours):
    _only_monday_morning(set_hours)
    make_slot(time="09:30", duration_minutes=60, activity_id=GOLF)

    report = generate_slots(db, GenerationRequest(
        start_date=WEEK_START, end_date=WEEK_START, activity_ids=[GOLF], duration_minutes=60,
    ))

    # 09:00 and 10:00 both intersect 09:30-10:30
    assert [s.time for s in report.created] == ["11:00"]


def test_existing_slots_are_untouched(db, make_slot, set_hours):
    _only_monday_morning(set_hours)
    slot_id = make_slot(time="10:00", max_capacity=8, price=99)

    generate_slots(db, GenerationRequest(
        start_date=WEEK_START, end_date=WEEK_START, activity_ids=[GOLF],
    ))

    db.rollback()
    slot = db.get(TimeSlots, slot_id)
    assert slot.state == SlotState.PUBLISHED
    assert slot.max_capacity == 8
    assert slot.price == 99


def test_disabled_activities_are_ignored(db):
    db.get(Activities, GOLF).enabled = 0
    db.commit()

    report = generate_slots(db, GenerationRequest(
        start_date=WEEK_START, end_date=WEEK_START, activity_ids=[GOLF],
    ))

    assert report.created_count == 0
    assert report.warnings == [WARNING_NO_ACTIVITIES]


def test_inverted_range_warns(db):
    report = generate_slots(db, GenerationRequest(
        start_date=WEEK_END, end_date=WEEK_START, activity_ids=[GOLF],
    ))
    assert report.warnings == [WARNING_NO_DATES]
    assert db.query(TimeSlots).count() == 0


def test_generation_bumps_version_only_when_creating(db, set_hours):
    from sportslot.services.schedule.versioning import get_data_version

    _only_monday_morning(set_hours)
    request = GenerationRequest(start_date=WEEK_START, end_date=WEEK_START, activity_ids=[GOLF])

    before = get_data_version(db)
    generate_slots(db, request)
    after_first = get_data_version(db)
    generate_slots(db, request)

    assert after_first == before + 1
    assert get_data_version(db) == after_first
