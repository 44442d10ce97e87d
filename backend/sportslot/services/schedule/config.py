# backend/sportslot/services/schedule/config.py
"""
Schedule configuration: working hours per weekday and closed date ranges.

Pure data + queries. Built from the database once per operation and passed
to the generator, the overlap/lifecycle checks and the customer catalog.

Weekdays use the calendar convention of the operator UI: 0 = Sunday ... 6 = Saturday.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from sqlalchemy.orm import Session

from ...models import AppSettings, ClosedPeriods, ClosureState, WorkingHours


def time_str_to_minutes(value: str) -> int:
    """"HH:MM" → minutes since midnight."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time_str(minutes: int) -> str:
    """Minutes since midnight → "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_date(value: str) -> date:
    return datetime.strptime(value, "%Y-%m-%d").date()


def day_of_week(dt: date) -> int:
    """0 = Sunday, 6 = Saturday."""
    return dt.isoweekday() % 7


def iter_dates(date_start: date, date_end: date) -> list[date]:
    """All dates in [date_start, date_end]; empty when the range is inverted."""
    dates = []
    current = date_start
    while current <= date_end:
        dates.append(current)
        current += timedelta(days=1)
    return dates


@dataclass(frozen=True)
class DayHours:
    day_of_week: int
    enabled: bool
    start_time: str
    end_time: str

    @property
    def start_minutes(self) -> int:
        return time_str_to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return time_str_to_minutes(self.end_time)


@dataclass(frozen=True)
class ClosedRange:
    start_date: str
    end_date: str

    def covers(self, date_str: str) -> bool:
        return self.start_date <= date_str <= self.end_date


DEFAULT_WORKING_HOURS: tuple[DayHours, ...] = (
    DayHours(0, False, "09:00", "18:00"),
    *(DayHours(dow, True, "09:00", "18:00") for dow in range(1, 7)),
)


@dataclass(frozen=True)
class ScheduleConfiguration:
    working_hours: tuple[DayHours, ...] = DEFAULT_WORKING_HOURS
    closures: tuple[ClosedRange, ...] = ()

    def hours_for(self, dow: int) -> DayHours | None:
        """Enabled hours for a weekday, or None when the day is off."""
        for wh in self.working_hours:
            if wh.day_of_week == dow:
                return wh if wh.enabled else None
        return None

    def is_closed(self, dt: date) -> bool:
        date_str = dt.isoformat()
        return any(c.covers(date_str) for c in self.closures)

    def is_open(self, dt: date) -> bool:
        return not self.is_closed(dt) and self.hours_for(day_of_week(dt)) is not None

    def contains(self, date_str: str, time_str: str, duration_minutes: int) -> bool:
        """True when [time, time + duration) lies inside the weekday's hours."""
        hours = self.hours_for(day_of_week(parse_date(date_str)))
        if hours is None:
            return False
        start = time_str_to_minutes(time_str)
        end = start + duration_minutes
        return start >= hours.start_minutes and end <= hours.end_minutes


def load_schedule_configuration(
    db: Session,
    published_closures_only: bool = False,
) -> ScheduleConfiguration:
    """
    Read working hours and closures.

    Operators (generation, moves) see every closure still on record, including
    drafts and ones staged for deletion. Customers only see published ones.
    """
    rows = db.query(WorkingHours).order_by(WorkingHours.day_of_week).all()
    if rows:
        working_hours = tuple(
            DayHours(r.day_of_week, bool(r.enabled), r.start_time, r.end_time)
            for r in rows
        )
    else:
        working_hours = DEFAULT_WORKING_HOURS

    query = db.query(ClosedPeriods)
    if published_closures_only:
        query = query.filter(ClosedPeriods.state == ClosureState.PUBLISHED)
    closures = tuple(ClosedRange(c.start_date, c.end_date) for c in query.all())

    return ScheduleConfiguration(working_hours=working_hours, closures=closures)


def ensure_defaults(db: Session) -> AppSettings:
    """Create the settings row and the weekly hours if missing (no commit)."""
    app_settings = db.get(AppSettings, "main")
    if app_settings is None:
        app_settings = AppSettings(id="main", data_version=1)
        db.add(app_settings)

    if db.query(WorkingHours).count() == 0:
        for wh in DEFAULT_WORKING_HOURS:
            db.add(WorkingHours(
                day_of_week=wh.day_of_week,
                enabled=int(wh.enabled),
                start_time=wh.start_time,
                end_time=wh.end_time,
            ))

    db.flush()
    return app_settings


def get_app_settings(db: Session) -> AppSettings:
    app_settings = db.get(AppSettings, "main")
    if app_settings is None:
        app_settings = ensure_defaults(db)
    return app_settings
