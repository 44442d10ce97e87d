# backend/sportslot/services/schedule/lifecycle.py
"""
Staged lifecycle of slots and closed periods.

Slot states (TimeSlots.state):
    draft         : created or edited, not visible to customers
    published     : visible to customers
    outside_hours : positioned outside the working-hours window; never published
plus the orthogonal TimeSlots.pending_deletion flag, and the published
snapshot (original_date/time/duration) kept while a published slot has
unconfirmed edits.

Transitions:
    create                    → draft | outside_hours
    move / resize             → draft | outside_hours (snapshot taken if it was published)
    mark / cancel deletion    → toggles pending_deletion, state untouched
    confirm deletion          → row removed (only when pending)
    publish (publication.py)  → draft → published, snapshot cleared

Closed periods follow the same machine without the capacity fields
(draft | published, pending_deletion).

Operations return LifecycleResult; business rejections are result values
with an error code, never exceptions. Every successful mutation bumps the
data version in the same transaction.
"""

import logging
from dataclasses import dataclass, field
from datetime import date

from sqlalchemy.orm import Session

from ... import errors
from ...database import atomic
from ...models import (
    Activities,
    ClosedPeriods,
    ClosureState,
    PublishedSnapshot,
    SlotState,
    TimeSlots,
    WorkingHours,
)
from .config import (
    DayHours,
    ScheduleConfiguration,
    day_of_week,
    get_app_settings,
    load_schedule_configuration,
    parse_date,
)
from .overlap import SlotCandidate, find_conflicts
from .versioning import bump_data_version

logger = logging.getLogger(__name__)


@dataclass
class LifecycleResult:
    ok: bool
    error_code: str | None = None
    slot: TimeSlots | None = None
    closure: ClosedPeriods | None = None
    conflicts: list[TimeSlots] = field(default_factory=list)


def _fail(code: str, **kwargs) -> LifecycleResult:
    return LifecycleResult(ok=False, error_code=code, **kwargs)


@dataclass
class SlotDraft:
    activity_id: int
    date: str
    time: str
    duration_minutes: int | None = None
    max_capacity: int | None = None
    price: float | None = None


# ── Pure transitions ─────────────────────────────────────────────────────


def place_slot(
    slot: TimeSlots,
    new_date: str,
    new_time: str,
    new_duration: int,
    config: ScheduleConfiguration,
) -> None:
    """
    Move/resize a slot and recompute its state.

    A published slot keeps its last customer-visible position as snapshot;
    an existing snapshot is never overwritten.
    """
    if slot.state == SlotState.PUBLISHED and slot.snapshot is None:
        slot.snapshot = PublishedSnapshot(slot.date, slot.time, slot.duration_minutes)

    slot.date = new_date
    slot.time = new_time
    slot.duration_minutes = new_duration

    if config.contains(new_date, new_time, new_duration):
        slot.state = SlotState.DRAFT
    else:
        slot.state = SlotState.OUTSIDE_HOURS


def publish_slot(slot: TimeSlots) -> str | None:
    """draft → published. Returns an error code when not allowed."""
    if slot.pending_deletion or slot.state != SlotState.DRAFT:
        return errors.INVALID_STATE
    slot.state = SlotState.PUBLISHED
    slot.snapshot = None
    return None


def publish_closure(closure: ClosedPeriods) -> str | None:
    if closure.pending_deletion or closure.state != ClosureState.DRAFT:
        return errors.INVALID_STATE
    closure.state = ClosureState.PUBLISHED
    return None


def reclassify_slot(slot: TimeSlots, config: ScheduleConfiguration) -> bool:
    """Re-check containment after a working-hours change. True if the state changed."""
    contained = config.contains(slot.date, slot.time, slot.duration_minutes)
    if slot.state == SlotState.OUTSIDE_HOURS and contained:
        slot.state = SlotState.DRAFT
        return True
    if slot.state != SlotState.OUTSIDE_HOURS and not contained:
        if slot.state == SlotState.PUBLISHED and slot.snapshot is None:
            slot.snapshot = PublishedSnapshot(slot.date, slot.time, slot.duration_minutes)
        slot.state = SlotState.OUTSIDE_HOURS
        return True
    return False


def _check_target(
    db: Session,
    candidate: SlotCandidate,
    config: ScheduleConfiguration,
) -> LifecycleResult | None:
    conflicts = find_conflicts(db, candidate)
    if conflicts:
        return _fail(errors.OVERLAP, conflicts=conflicts)

    target = parse_date(candidate.date)
    if config.hours_for(day_of_week(target)) is None or config.is_closed(target):
        return _fail(errors.CLOSED_DAY)
    return None


# ── Slots ────────────────────────────────────────────────────────────────


def create_slot(db: Session, draft: SlotDraft) -> LifecycleResult:
    with atomic(db):
        if db.get(Activities, draft.activity_id) is None:
            return _fail(errors.ACTIVITY_NOT_FOUND)

        app_settings = get_app_settings(db)
        duration = draft.duration_minutes or app_settings.default_slot_duration
        candidate = SlotCandidate(draft.activity_id, draft.date, draft.time, duration)

        config = load_schedule_configuration(db)
        rejected = _check_target(db, candidate, config)
        if rejected:
            return rejected

        slot = TimeSlots(
            activity_id=draft.activity_id,
            date=draft.date,
            time=draft.time,
            duration_minutes=duration,
            max_capacity=draft.max_capacity or app_settings.default_max_capacity,
            current_bookings=0,
            price=draft.price if draft.price is not None else app_settings.default_price,
            state=(
                SlotState.DRAFT
                if config.contains(draft.date, draft.time, duration)
                else SlotState.OUTSIDE_HOURS
            ),
            pending_deletion=0,
        )
        db.add(slot)
        bump_data_version(db)

    logger.info(f"Slot created: {slot.id} {slot.date} {slot.time} ({slot.state})")
    return LifecycleResult(ok=True, slot=slot)


def move_slot(db: Session, slot_id: int, new_date: str, new_time: str) -> LifecycleResult:
    with atomic(db):
        slot = db.get(TimeSlots, slot_id)
        if slot is None:
            return _fail(errors.SLOT_NOT_FOUND)
        return _reposition(db, slot, new_date, new_time, slot.duration_minutes)


def resize_slot(db: Session, slot_id: int, new_duration: int) -> LifecycleResult:
    with atomic(db):
        slot = db.get(TimeSlots, slot_id)
        if slot is None:
            return _fail(errors.SLOT_NOT_FOUND)
        return _reposition(db, slot, slot.date, slot.time, new_duration)


def _reposition(
    db: Session,
    slot: TimeSlots,
    new_date: str,
    new_time: str,
    new_duration: int,
) -> LifecycleResult:
    config = load_schedule_configuration(db)
    candidate = SlotCandidate(slot.activity_id, new_date, new_time, new_duration, id=slot.id)
    rejected = _check_target(db, candidate, config)
    if rejected:
        return rejected

    previous = (slot.date, slot.time, slot.duration_minutes, slot.state)
    place_slot(slot, new_date, new_time, new_duration, config)
    bump_data_version(db)
    logger.info(
        f"Slot {slot.id} repositioned {previous[0]} {previous[1]}/{previous[2]}min ({previous[3]}) "
        f"→ {slot.date} {slot.time}/{slot.duration_minutes}min ({slot.state})"
    )
    return LifecycleResult(ok=True, slot=slot)


def update_slot_details(
    db: Session,
    slot_id: int,
    max_capacity: int | None = None,
    price: float | None = None,
) -> LifecycleResult:
    """Capacity/price edits. Capacity never drops below places already booked."""
    with atomic(db):
        slot = db.get(TimeSlots, slot_id)
        if slot is None:
            return _fail(errors.SLOT_NOT_FOUND)
        if max_capacity is not None:
            if max_capacity < slot.current_bookings:
                return _fail(errors.CAPACITY_BELOW_BOOKINGS, slot=slot)
            slot.max_capacity = max_capacity
        if price is not None:
            slot.price = price
        bump_data_version(db)
    return LifecycleResult(ok=True, slot=slot)


def mark_pending_deletion(db: Session, slot_id: int) -> LifecycleResult:
    return _set_slot_pending(db, slot_id, True)


def cancel_pending_deletion(db: Session, slot_id: int) -> LifecycleResult:
    return _set_slot_pending(db, slot_id, False)


def _set_slot_pending(db: Session, slot_id: int, pending: bool) -> LifecycleResult:
    with atomic(db):
        slot = db.get(TimeSlots, slot_id)
        if slot is None:
            return _fail(errors.SLOT_NOT_FOUND)
        if bool(slot.pending_deletion) != pending:
            slot.pending_deletion = int(pending)
            bump_data_version(db)
    return LifecycleResult(ok=True, slot=slot)


def confirm_deletion(db: Session, slot_id: int) -> LifecycleResult:
    with atomic(db):
        slot = db.get(TimeSlots, slot_id)
        if slot is None:
            return _fail(errors.SLOT_NOT_FOUND)
        if not slot.pending_deletion:
            return _fail(errors.NOT_PENDING_DELETION, slot=slot)
        db.delete(slot)
        bump_data_version(db)
    logger.info(f"Slot deleted after confirmation: {slot_id}")
    return LifecycleResult(ok=True)


def delete_slot(db: Session, slot_id: int) -> LifecycleResult:
    """Immediate delete, allowed only for slots customers never saw and nobody booked."""
    with atomic(db):
        slot = db.get(TimeSlots, slot_id)
        if slot is None:
            return _fail(errors.SLOT_NOT_FOUND)
        if (
            slot.state == SlotState.PUBLISHED
            or slot.snapshot is not None
            or slot.current_bookings > 0
        ):
            return _fail(errors.DELETION_REQUIRES_CONFIRMATION, slot=slot)
        db.delete(slot)
        bump_data_version(db)
    return LifecycleResult(ok=True)


# ── Working hours ────────────────────────────────────────────────────────


def update_working_hours(db: Session, hours: list[DayHours]) -> int:
    """
    Replace weekday hours and reclassify every slot against them.

    Returns the number of slots whose state changed.
    """
    with atomic(db):
        for wh in hours:
            row = db.get(WorkingHours, wh.day_of_week)
            if row is None:
                row = WorkingHours(day_of_week=wh.day_of_week)
                db.add(row)
            row.enabled = int(wh.enabled)
            row.start_time = wh.start_time
            row.end_time = wh.end_time
        db.flush()

        config = load_schedule_configuration(db)
        changed = sum(1 for slot in db.query(TimeSlots).all() if reclassify_slot(slot, config))
        bump_data_version(db)

    if changed:
        logger.info(f"Working hours updated, {changed} slots reclassified")
    return changed


# ── Closed periods ───────────────────────────────────────────────────────


def create_closure(db: Session, start_date: date, end_date: date, reason: str = "") -> LifecycleResult:
    with atomic(db):
        closure = ClosedPeriods(
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
            reason=reason,
            state=ClosureState.DRAFT,
            pending_deletion=0,
        )
        db.add(closure)
        bump_data_version(db)
    return LifecycleResult(ok=True, closure=closure)


def mark_closure_pending_deletion(db: Session, closure_id: int) -> LifecycleResult:
    return _set_closure_pending(db, closure_id, True)


def cancel_closure_pending_deletion(db: Session, closure_id: int) -> LifecycleResult:
    return _set_closure_pending(db, closure_id, False)


def _set_closure_pending(db: Session, closure_id: int, pending: bool) -> LifecycleResult:
    with atomic(db):
        closure = db.get(ClosedPeriods, closure_id)
        if closure is None:
            return _fail(errors.CLOSURE_NOT_FOUND)
        if bool(closure.pending_deletion) != pending:
            closure.pending_deletion = int(pending)
            bump_data_version(db)
    return LifecycleResult(ok=True, closure=closure)


def confirm_closure_deletion(db: Session, closure_id: int) -> LifecycleResult:
    with atomic(db):
        closure = db.get(ClosedPeriods, closure_id)
        if closure is None:
            return _fail(errors.CLOSURE_NOT_FOUND)
        if not closure.pending_deletion:
            return _fail(errors.NOT_PENDING_DELETION, closure=closure)
        db.delete(closure)
        bump_data_version(db)
    return LifecycleResult(ok=True)


def delete_closure(db: Session, closure_id: int) -> LifecycleResult:
    """Immediate delete of a draft closure; published ones go through pending deletion."""
    with atomic(db):
        closure = db.get(ClosedPeriods, closure_id)
        if closure is None:
            return _fail(errors.CLOSURE_NOT_FOUND)
        if closure.state == ClosureState.PUBLISHED:
            return _fail(errors.DELETION_REQUIRES_CONFIRMATION, closure=closure)
        db.delete(closure)
        bump_data_version(db)
    return LifecycleResult(ok=True)
