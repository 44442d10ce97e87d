"""
Error taxonomy for the scheduling core.

Services return expected business outcomes as result values carrying one of the
error codes below. The HTTP boundary turns a code into the matching exception
class via error_for_code(); FastAPI handlers in main.py render it.

Only infrastructure failures (PersistenceError) are raised from service code.
"""
from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------

VALIDATION_ERROR = "VALIDATION_ERROR"

SLOT_NOT_FOUND = "SLOT_NOT_FOUND"
CLOSURE_NOT_FOUND = "CLOSURE_NOT_FOUND"
ACTIVITY_NOT_FOUND = "ACTIVITY_NOT_FOUND"
BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"

NOT_ENOUGH_PLACES = "NOT_ENOUGH_PLACES"
RACE_CONDITION = "RACE_CONDITION"
CAPACITY_BELOW_BOOKINGS = "CAPACITY_BELOW_BOOKINGS"

OVERLAP = "OVERLAP"
CLOSED_DAY = "CLOSED_DAY"

INVALID_STATE = "INVALID_STATE"
NOT_PENDING_DELETION = "NOT_PENDING_DELETION"
DELETION_REQUIRES_CONFIRMATION = "DELETION_REQUIRES_CONFIRMATION"

PERSISTENCE_ERROR = "PERSISTENCE_ERROR"


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------


class SportSlotError(Exception):
    """Base error. `code` is the machine-readable errorCode sent to clients."""

    status_code = 500
    default_code = "INTERNAL_ERROR"

    def __init__(self, detail: str = "", code: str | None = None, **extra: Any):
        super().__init__(detail or code or self.default_code)
        self.detail = detail
        self.code = code or self.default_code
        self.extra = extra

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": False, "errorCode": self.code}
        if self.detail:
            payload["error"] = self.detail
        payload.update(self.extra)
        return payload


class ValidationError(SportSlotError):
    status_code = 400
    default_code = VALIDATION_ERROR


class NotFoundError(SportSlotError):
    status_code = 404
    default_code = SLOT_NOT_FOUND


class CapacityError(SportSlotError):
    status_code = 409
    default_code = NOT_ENOUGH_PLACES


class ScheduleConflictError(SportSlotError):
    status_code = 409
    default_code = OVERLAP


class OverlapError(ScheduleConflictError):
    default_code = OVERLAP


class ClosedDayError(ScheduleConflictError):
    default_code = CLOSED_DAY


class StateTransitionError(SportSlotError):
    status_code = 409
    default_code = INVALID_STATE


class PersistenceError(SportSlotError):
    """Storage unavailable or transaction budget exceeded. Retryable."""

    status_code = 503
    default_code = PERSISTENCE_ERROR


# errorCode -> exception class. First lookup wins; unknown codes fall back to 409.
ERROR_CLASSES: dict[str, type[SportSlotError]] = {
    VALIDATION_ERROR: ValidationError,
    SLOT_NOT_FOUND: NotFoundError,
    CLOSURE_NOT_FOUND: NotFoundError,
    ACTIVITY_NOT_FOUND: NotFoundError,
    BOOKING_NOT_FOUND: NotFoundError,
    NOT_ENOUGH_PLACES: CapacityError,
    RACE_CONDITION: CapacityError,
    CAPACITY_BELOW_BOOKINGS: CapacityError,
    OVERLAP: OverlapError,
    CLOSED_DAY: ClosedDayError,
    INVALID_STATE: StateTransitionError,
    NOT_PENDING_DELETION: StateTransitionError,
    DELETION_REQUIRES_CONFIRMATION: StateTransitionError,
    PERSISTENCE_ERROR: PersistenceError,
}

MESSAGES: dict[str, str] = {
    SLOT_NOT_FOUND: "Slot not found",
    CLOSURE_NOT_FOUND: "Closed period not found",
    ACTIVITY_NOT_FOUND: "Activity not found",
    BOOKING_NOT_FOUND: "Booking not found",
    NOT_ENOUGH_PLACES: "Not enough places left in this slot",
    RACE_CONDITION: "The last places were just taken by another booking",
    CAPACITY_BELOW_BOOKINGS: "Capacity cannot be lower than the places already booked",
    OVERLAP: "Slot overlaps another slot of the same activity",
    CLOSED_DAY: "The facility is closed on that day",
    INVALID_STATE: "Operation not allowed in the current state",
    NOT_PENDING_DELETION: "Item is not marked for deletion",
    DELETION_REQUIRES_CONFIRMATION: "Published or booked slots must go through pending deletion",
}


def error_for_code(code: str, **extra: Any) -> SportSlotError:
    """Build the exception matching a business error code."""
    cls = ERROR_CLASSES.get(code, StateTransitionError)
    return cls(MESSAGES.get(code, ""), code=code, **extra)
