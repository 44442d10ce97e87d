# backend/sportslot/schemas/sync.py

from typing import Optional, Union

from .bookings import BookingRead
from .common import CamelModel
from .settings import SettingsRead
from .slots import CatalogSlotRead, SlotRead


class SyncData(CamelModel):
    # Operator view carries SlotRead, customer view CatalogSlotRead
    slots: list[Union[SlotRead, CatalogSlotRead]]
    bookings: list[BookingRead]
    settings: Optional[SettingsRead] = None


class SyncResponse(CamelModel):
    success: bool = True
    needs_sync: bool
    version: int
    data: Optional[SyncData] = None
