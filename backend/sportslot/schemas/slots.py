# backend/sportslot/schemas/slots.py

from datetime import date
from typing import Optional

from pydantic import Field, model_validator

from .common import CamelModel, TimeField


class SlotCreate(CamelModel):
    activity_id: int
    date: date
    time: str = TimeField()
    duration_minutes: Optional[int] = Field(default=None, ge=5, le=24 * 60)
    max_capacity: Optional[int] = Field(default=None, ge=1)
    price: Optional[float] = Field(default=None, ge=0)


class SlotMove(CamelModel):
    date: date
    time: str = TimeField()


class SlotResize(CamelModel):
    duration_minutes: int = Field(ge=5, le=24 * 60)


class SlotUpdate(CamelModel):
    max_capacity: Optional[int] = Field(default=None, ge=1)
    price: Optional[float] = Field(default=None, ge=0)


class SlotGenerate(CamelModel):
    start_date: date
    end_date: date
    activity_ids: list[int] = Field(min_length=1)
    duration_minutes: Optional[int] = Field(default=None, ge=5, le=24 * 60)
    max_capacity: Optional[int] = Field(default=None, ge=1)
    price: Optional[float] = Field(default=None, ge=0)
    lunch_break_start: Optional[str] = TimeField(default=None)
    lunch_break_end: Optional[str] = TimeField(default=None)

    @model_validator(mode="after")
    def check_lunch_break(self):
        if (self.lunch_break_start is None) != (self.lunch_break_end is None):
            raise ValueError("lunchBreakStart and lunchBreakEnd go together")
        if self.lunch_break_start and self.lunch_break_start >= self.lunch_break_end:
            raise ValueError("lunchBreakStart must be before lunchBreakEnd")
        return self


class SlotRead(CamelModel):
    """Operator view of a slot, including staged state."""
    id: int
    activity_id: int
    date: str
    time: str
    duration_minutes: int
    max_capacity: int
    current_bookings: int
    price: float

    state: str
    published: bool
    outside_working_hours: bool
    pending_deletion: bool
    original_date: Optional[str] = None
    original_time: Optional[str] = None
    original_duration: Optional[int] = None

    created_at: Optional[str] = None


class CatalogSlotRead(CamelModel):
    """Customer view: published position only."""
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


class GenerationResult(CamelModel):
    success: bool = True
    created_count: int
    warnings: list[str] = []
    slots: list[SlotRead] = []
