# backend/sportslot/schemas/bookings.py

from typing import Optional

from pydantic import Field

from .common import CamelModel


class BookingCreate(CamelModel):
    slot_id: int
    customer_name: str = Field(min_length=1)
    customer_email: str = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    customer_phone: str = ""
    number_of_people: int = Field(ge=1)

    # Informational; the booking takes both from the slot itself
    activity_id: Optional[int] = None
    activity_name: Optional[str] = None


class BookingRead(CamelModel):
    id: int
    slot_id: int
    activity_id: int
    activity_name: str

    customer_name: str
    customer_email: str
    customer_phone: str

    number_of_people: int
    total_price: float

    date: str
    time: str
    created_at: str


class UpdatedSlot(CamelModel):
    id: int
    current_bookings: int
    max_capacity: int


class BookingCreated(CamelModel):
    success: bool = True
    booking: BookingRead
    updated_slot: UpdatedSlot
