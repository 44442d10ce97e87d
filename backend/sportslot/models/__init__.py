from .tables import (
    Activities,
    AppSettings,
    Base,
    Bookings,
    ClosedPeriods,
    ClosureState,
    PublishedSnapshot,
    SlotState,
    TimeSlots,
    WorkingHours,
    metadata,
)

__all__ = [
    "Activities",
    "AppSettings",
    "Base",
    "Bookings",
    "ClosedPeriods",
    "ClosureState",
    "PublishedSnapshot",
    "SlotState",
    "TimeSlots",
    "WorkingHours",
    "metadata",
]
