# backend/sportslot/schemas/settings.py

from typing import Optional

from pydantic import Field

from .common import CamelModel


class SettingsRead(CamelModel):
    default_slot_duration: int
    default_max_capacity: int
    default_price: float
    min_booking_advance: int
    data_version: int


class SettingsUpdate(CamelModel):
    default_slot_duration: Optional[int] = Field(default=None, ge=5, le=24 * 60)
    default_max_capacity: Optional[int] = Field(default=None, ge=1)
    default_price: Optional[float] = Field(default=None, ge=0)
    min_booking_advance: Optional[int] = Field(default=None, ge=0)
