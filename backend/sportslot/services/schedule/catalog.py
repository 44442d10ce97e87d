# backend/sportslot/services/schedule/catalog.py
"""
Customer-facing projection of the slot table.

A slot is listed for customers when:
✓ it is published, or it was published before an unconfirmed move/resize
  (then it is shown at its published snapshot position)
✓ it is not outside working hours
✓ its activity is enabled
✓ its customer-visible date is not inside a published closure

Slots staged for deletion stay listed until the deletion is confirmed.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from sqlalchemy.orm import Session, joinedload

from ...models import PublishedSnapshot, SlotState, TimeSlots
from .config import ScheduleConfiguration, get_app_settings, load_schedule_configuration, parse_date


@dataclass(frozen=True)
class CatalogSlot:
    id: int
    activity_id: int
    activity_name: str
    date: str
    time: str
    duration_minutes: int
    max_capacity: int
    current_bookings: int
    price: float
    available_places: int
    bookable: bool


def customer_position(slot: TimeSlots) -> PublishedSnapshot:
    """Where customers see the slot: the snapshot if edits are staged."""
    return slot.snapshot or PublishedSnapshot(slot.date, slot.time, slot.duration_minutes)


def is_customer_visible(slot: TimeSlots, config: ScheduleConfiguration) -> bool:
    if slot.state == SlotState.OUTSIDE_HOURS:
        return False
    if slot.state != SlotState.PUBLISHED and slot.snapshot is None:
        return False
    if slot.activity is not None and not slot.activity.enabled:
        return False
    return not config.is_closed(parse_date(customer_position(slot).date))


def is_bookable(slot: TimeSlots, now: datetime, min_advance_minutes: int) -> bool:
    position = customer_position(slot)
    starts_at = datetime.strptime(f"{position.date} {position.time}", "%Y-%m-%d %H:%M")
    if starts_at < now + timedelta(minutes=max(min_advance_minutes, 0)):
        return False
    return slot.available_places > 0


def build_customer_catalog(
    db: Session,
    activity_id: int | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    now: datetime | None = None,
) -> list[CatalogSlot]:
    now = now or datetime.now()
    config = load_schedule_configuration(db, published_closures_only=True)
    min_advance = get_app_settings(db).min_booking_advance or 0

    query = db.query(TimeSlots).options(joinedload(TimeSlots.activity))
    if activity_id is not None:
        query = query.filter(TimeSlots.activity_id == activity_id)

    catalog = []
    for slot in query.all():
        if not is_customer_visible(slot, config):
            continue
        position = customer_position(slot)
        if date_from and position.date < date_from.isoformat():
            continue
        if date_to and position.date > date_to.isoformat():
            continue
        catalog.append(CatalogSlot(
            id=slot.id,
            activity_id=slot.activity_id,
            activity_name=slot.activity.name if slot.activity else "",
            date=position.date,
            time=position.time,
            duration_minutes=position.duration_minutes,
            max_capacity=slot.max_capacity,
            current_bookings=slot.current_bookings,
            price=slot.price,
            available_places=slot.available_places,
            bookable=is_bookable(slot, now, min_advance),
        ))

    catalog.sort(key=lambda s: (s.date, s.time, s.activity_id))
    return catalog
