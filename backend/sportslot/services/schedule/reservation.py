# backend/sportslot/services/schedule/reservation.py
"""
Atomic reservation of places in a customer-visible slot.

Flow (one transaction):
1. read the slot as customers see it                  → SLOT_NOT_FOUND
2. check remaining places                             → NOT_ENOUGH_PLACES
3. conditional increment of current_bookings          → RACE_CONDITION on 0 rows
4. insert the booking snapshot, bump the data version

The conditional UPDATE is what guarantees current_bookings ≤ max_capacity;
step 2 only produces the friendlier error when the slot is already full.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select, update
from sqlalchemy.orm import Session, joinedload

from ... import errors
from ...database import atomic
from ...models import Bookings, TimeSlots
from ..events import emit_event
from .catalog import customer_position, is_customer_visible
from .config import load_schedule_configuration
from .versioning import bump_data_version

logger = logging.getLogger(__name__)


@dataclass
class CustomerDetails:
    name: str
    email: str
    phone: str = ""


@dataclass(frozen=True)
class BookableSlot:
    """Slot as read before the conditional increment (customer-visible position)."""
    id: int
    activity_id: int
    activity_name: str
    date: str
    time: str
    price: float
    max_capacity: int
    current_bookings: int

    @property
    def available_places(self) -> int:
        return self.max_capacity - self.current_bookings


@dataclass
class ReservationResult:
    success: bool
    error_code: str | None = None
    available_places: int | None = None
    booking: Bookings | None = None
    slot_id: int | None = None
    current_bookings: int | None = None
    max_capacity: int | None = None


def read_bookable_slot(db: Session, slot_id: int) -> BookableSlot | None:
    """The slot as a customer can book it, or None when customers cannot see it."""
    slot = (
        db.query(TimeSlots)
        .options(joinedload(TimeSlots.activity))
        .filter(TimeSlots.id == slot_id)
        .first()
    )
    if slot is None:
        return None
    config = load_schedule_configuration(db, published_closures_only=True)
    if not is_customer_visible(slot, config):
        return None

    position = customer_position(slot)
    return BookableSlot(
        id=slot.id,
        activity_id=slot.activity_id,
        activity_name=slot.activity.name if slot.activity else "",
        date=position.date,
        time=position.time,
        price=slot.price,
        max_capacity=slot.max_capacity,
        current_bookings=slot.current_bookings,
    )


def _increment_bookings(db: Session, slot_id: int, number_of_people: int) -> bool:
    result = db.execute(
        update(TimeSlots)
        .where(
            TimeSlots.id == slot_id,
            TimeSlots.current_bookings <= TimeSlots.max_capacity - number_of_people,
        )
        .values(current_bookings=TimeSlots.current_bookings + number_of_people)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def reserve(
    db: Session,
    slot_id: int,
    number_of_people: int,
    customer: CustomerDetails,
) -> ReservationResult:
    if number_of_people < 1:
        return ReservationResult(success=False, error_code=errors.VALIDATION_ERROR)

    with atomic(db):
        slot = read_bookable_slot(db, slot_id)
        if slot is None:
            return ReservationResult(success=False, error_code=errors.SLOT_NOT_FOUND)

        if slot.available_places < number_of_people:
            return ReservationResult(
                success=False,
                error_code=errors.NOT_ENOUGH_PLACES,
                available_places=max(slot.available_places, 0),
            )

        if not _increment_bookings(db, slot.id, number_of_people):
            logger.warning(f"Reservation race lost on slot {slot.id} ({number_of_people} places)")
            return ReservationResult(
                success=False,
                error_code=errors.RACE_CONDITION,
                available_places=0,
            )

        booking = Bookings(
            slot_id=slot.id,
            activity_id=slot.activity_id,
            activity_name=slot.activity_name,
            customer_name=customer.name,
            customer_email=customer.email,
            customer_phone=customer.phone or "",
            number_of_people=number_of_people,
            total_price=slot.price * number_of_people,
            date=slot.date,
            time=slot.time,
        )
        db.add(booking)
        bump_data_version(db)

        current_bookings, max_capacity = db.execute(
            select(TimeSlots.current_bookings, TimeSlots.max_capacity)
            .where(TimeSlots.id == slot.id)
        ).one()

    logger.info(
        f"Booking {booking.id} created: slot={slot.id} people={number_of_people} "
        f"({current_bookings}/{max_capacity})"
    )
    emit_event("booking_created", {
        "booking_id": booking.id,
        "slot_id": slot.id,
        "activity_name": slot.activity_name,
        "date": slot.date,
        "time": slot.time,
        "number_of_people": number_of_people,
        "customer_name": customer.name,
    })

    return ReservationResult(
        success=True,
        booking=booking,
        slot_id=slot.id,
        current_bookings=current_bookings,
        max_capacity=max_capacity,
    )
