# backend/sportslot/routers/bookings.py
# PATCH = 405, DELETE = 405 (bookings are immutable records)

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .. import errors
from ..database import get_db
from ..models import Bookings as DBBookings
from ..schemas.bookings import BookingCreate, BookingCreated, BookingRead, UpdatedSlot
from ..services.schedule.reservation import CustomerDetails, reserve

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("/", response_model=list[BookingRead])
def list_bookings(
    slot_id: int | None = None,
    db: Session = Depends(get_db),
):
    query = db.query(DBBookings)
    if slot_id is not None:
        query = query.filter(DBBookings.slot_id == slot_id)
    return query.order_by(DBBookings.created_at.desc(), DBBookings.id.desc()).all()


@router.get("/{id}", response_model=BookingRead)
def get_booking(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBBookings, id)
    if not obj:
        raise errors.error_for_code(errors.BOOKING_NOT_FOUND)
    return obj


@router.post("/", response_model=BookingCreated, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    db: Session = Depends(get_db),
):
    result = reserve(
        db,
        slot_id=data.slot_id,
        number_of_people=data.number_of_people,
        customer=CustomerDetails(
            name=data.customer_name,
            email=data.customer_email,
            phone=data.customer_phone,
        ),
    )
    if not result.success:
        extra = {}
        if result.available_places is not None:
            extra["availablePlaces"] = result.available_places
        raise errors.error_for_code(result.error_code, **extra)

    return BookingCreated(
        booking=BookingRead.model_validate(result.booking),
        updated_slot=UpdatedSlot(
            id=result.slot_id,
            current_bookings=result.current_bookings,
            max_capacity=result.max_capacity,
        ),
    )


@router.patch("/{id}")
def patch_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )


@router.delete("/{id}")
def delete_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )
