from datetime import date

from sportslot.models import AppSettings, WorkingHours
from sportslot.services.schedule.config import (
    ClosedRange,
    DayHours,
    ScheduleConfiguration,
    day_of_week,
    get_app_settings,
    iter_dates,
    load_schedule_configuration,
    minutes_to_time_str,
    time_str_to_minutes,
)


def test_time_conversions():
    assert time_str_to_minutes("00:00") == 0
    assert time_str_to_minutes("09:30") == 570
    assert minutes_to_time_str(570) == "09:30"
    assert minutes_to_time_str(time_str_to_minutes("17:05")) == "17:05"


def test_day_of_week_starts_on_sunday():
    assert day_of_week(date(2030, 1, 6)) == 0
    assert day_of_week(date(2030, 1, 7)) == 1
    assert day_of_week(date(2030, 1, 12)) == 6


def test_iter_dates_inclusive_and_inverted():
    assert iter_dates(date(2030, 1, 7), date(2030, 1, 9)) == [
        date(2030, 1, 7), date(2030, 1, 8), date(2030, 1, 9),
    ]
    assert iter_dates(date(2030, 1, 9), date(2030, 1, 7)) == []


def test_contains_requires_whole_interval_inside_hours():
    config = ScheduleConfiguration(working_hours=(DayHours(1, True, "09:00", "12:00"),))
    assert config.contains("2030-01-07", "09:00", 60)
    assert config.contains("2030-01-07", "11:00", 60)
    assert not config.contains("2030-01-07", "11:30", 60)
    assert not config.contains("2030-01-07", "08:30", 60)
    # Tuesday has no hours at all
    assert not config.contains("2030-01-08", "10:00", 60)


def test_closures_cover_inclusive_range():
    config = ScheduleConfiguration(closures=(ClosedRange("2030-01-07", "2030-01-08"),))
    assert config.is_closed(date(2030, 1, 7))
    assert config.is_closed(date(2030, 1, 8))
    assert not config.is_closed(date(2030, 1, 9))
    assert not config.is_open(date(2030, 1, 8))
    assert config.is_open(date(2030, 1, 9))


def test_defaults_seeded(db):
    app_settings = db.get(AppSettings, "main")
    assert app_settings.default_slot_duration == 60
    assert app_settings.default_max_capacity == 4
    assert app_settings.default_price == 50
    assert app_settings.min_booking_advance == 0
    assert app_settings.data_version >= 1

    hours = {wh.day_of_week: wh for wh in db.query(WorkingHours).all()}
    assert set(hours) == set(range(7))
    assert not hours[0].enabled
    assert all(hours[d].enabled and hours[d].start_time == "09:00" for d in range(1, 7))


def test_load_configuration_filters_draft_closures_for_customers(db):
    from sportslot.services.schedule import lifecycle

    lifecycle.create_closure(db, date(2030, 1, 7), date(2030, 1, 7), "maintenance")

    operator = load_schedule_configuration(db)
    customer = load_schedule_configuration(db, published_closures_only=True)
    assert operator.is_closed(date(2030, 1, 7))
    assert not customer.is_closed(date(2030, 1, 7))


def test_get_app_settings_creates_missing_row(db):
    db.query(AppSettings).delete()
    db.commit()

    app_settings = get_app_settings(db)
    assert app_settings.id == "main"
    assert app_settings.default_max_capacity == 4
