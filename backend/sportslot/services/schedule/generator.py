# backend/sportslot/services/schedule/generator.py
"""
Bulk slot generation for a date range and a set of activities.

For every day in the range:
✓ skipped when closed (any closure on record) or the weekday is off
✓ steps through [day_start, day_end] in `duration` increments while the slot fits
✓ skips steps intersecting the optional lunch break
✓ skips (date, time, activity) positions already taken, and positions
  overlapping an existing slot of the same activity

Never modifies or removes existing slots. New slots are drafts.
"Nothing to do" situations are reported as warnings, not errors.
"""

import logging
from dataclasses import dataclass, field
from datetime import date

from sqlalchemy.orm import Session

from ...database import atomic
from ...models import Activities, SlotState, TimeSlots
from .config import (
    ScheduleConfiguration,
    day_of_week,
    get_app_settings,
    iter_dates,
    load_schedule_configuration,
    minutes_to_time_str,
    time_str_to_minutes,
)
from .overlap import SlotCandidate, overlaps
from .versioning import bump_data_version

logger = logging.getLogger(__name__)

WARNING_NO_ACTIVITIES = "no_activities_enabled"
WARNING_NO_DATES = "no_dates"
WARNING_NOTHING_CREATED = "nothing_created"


@dataclass
class GenerationRequest:
    start_date: date
    end_date: date
    activity_ids: list[int]
    duration_minutes: int | None = None
    max_capacity: int | None = None
    price: float | None = None
    lunch_break_start: str | None = None  # "HH:MM"
    lunch_break_end: str | None = None


@dataclass
class GenerationReport:
    created: list[TimeSlots] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return len(self.created)


def plan_day_times(
    config: ScheduleConfiguration,
    target_date: date,
    duration_minutes: int,
    lunch_break: tuple[int, int] | None = None,
) -> list[str]:
    """Start times ("HH:MM") that fit the day's working hours."""
    if config.is_closed(target_date):
        return []
    hours = config.hours_for(day_of_week(target_date))
    if hours is None:
        return []

    times = []
    t = hours.start_minutes
    while t + duration_minutes <= hours.end_minutes:
        if lunch_break and t < lunch_break[1] and lunch_break[0] < t + duration_minutes:
            t += duration_minutes
            continue
        times.append(minutes_to_time_str(t))
        t += duration_minutes
    return times


def plan_slots(
    config: ScheduleConfiguration,
    dates: list[date],
    activity_ids: list[int],
    duration_minutes: int,
    existing: list,
    lunch_break: tuple[int, int] | None = None,
) -> list[SlotCandidate]:
    """Candidates that clash with nothing in `existing` (pure)."""
    taken = {(s.date, s.time, s.activity_id) for s in existing}
    by_day: dict[tuple[str, int], list] = {}
    for s in existing:
        by_day.setdefault((s.date, s.activity_id), []).append(s)

    planned = []
    for dt in dates:
        date_str = dt.isoformat()
        for time_str in plan_day_times(config, dt, duration_minutes, lunch_break):
            for activity_id in activity_ids:
                if (date_str, time_str, activity_id) in taken:
                    continue
                candidate = SlotCandidate(activity_id, date_str, time_str, duration_minutes)
                same_day = by_day.setdefault((date_str, activity_id), [])
                if overlaps(candidate, same_day):
                    continue
                planned.append(candidate)
                taken.add((date_str, time_str, activity_id))
                same_day.append(candidate)
    return planned


def generate_slots(db: Session, request: GenerationRequest) -> GenerationReport:
    report = GenerationReport()

    dates = iter_dates(request.start_date, request.end_date)
    if not dates:
        report.warnings.append(WARNING_NO_DATES)
        return report

    with atomic(db):
        activity_ids = [
            a.id for a in (
                db.query(Activities)
                .filter(Activities.id.in_(request.activity_ids), Activities.enabled == 1)
                .order_by(Activities.sort_order, Activities.id)
                .all()
            )
        ]
        if not activity_ids:
            report.warnings.append(WARNING_NO_ACTIVITIES)
            return report

        app_settings = get_app_settings(db)
        duration = request.duration_minutes or app_settings.default_slot_duration
        capacity = request.max_capacity or app_settings.default_max_capacity
        price = request.price if request.price is not None else app_settings.default_price

        lunch_break = None
        if request.lunch_break_start and request.lunch_break_end:
            lunch_break = (
                time_str_to_minutes(request.lunch_break_start),
                time_str_to_minutes(request.lunch_break_end),
            )

        config = load_schedule_configuration(db)
        existing = (
            db.query(TimeSlots)
            .filter(
                TimeSlots.activity_id.in_(activity_ids),
                TimeSlots.date >= dates[0].isoformat(),
                TimeSlots.date <= dates[-1].isoformat(),
            )
            .all()
        )

        candidates = plan_slots(config, dates, activity_ids, duration, existing, lunch_break)
        for candidate in candidates:
            slot = TimeSlots(
                activity_id=candidate.activity_id,
                date=candidate.date,
                time=candidate.time,
                duration_minutes=candidate.duration_minutes,
                max_capacity=capacity,
                current_bookings=0,
                price=price,
                state=SlotState.DRAFT,
                pending_deletion=0,
            )
            db.add(slot)
            report.created.append(slot)

        if report.created:
            bump_data_version(db)

    if not report.created:
        report.warnings.append(WARNING_NOTHING_CREATED)

    logger.info(
        f"Generated {report.created_count} slots for {request.start_date}..{request.end_date}, "
        f"activities={activity_ids}"
    )
    return report
