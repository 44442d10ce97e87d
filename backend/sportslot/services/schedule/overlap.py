# backend/sportslot/services/schedule/overlap.py
"""
Overlap checks between slots of the same activity.

Two slots overlap when they share activity and date and their
[time, time + duration) intervals intersect. Slots of different activities
may share a time range.
"""

from dataclasses import dataclass
from typing import Iterable, Protocol

from sqlalchemy.orm import Session

from ...models import TimeSlots
from .config import time_str_to_minutes


class SlotLike(Protocol):
    id: int | None
    activity_id: int
    date: str
    time: str
    duration_minutes: int


@dataclass(frozen=True)
class SlotCandidate:
    """A slot position that does not exist yet (or the target of a move)."""
    activity_id: int
    date: str
    time: str
    duration_minutes: int
    id: int | None = None


def _interval(slot: SlotLike) -> tuple[int, int]:
    start = time_str_to_minutes(slot.time)
    return start, start + slot.duration_minutes


def conflicts_with(candidate: SlotLike, other: SlotLike) -> bool:
    if candidate.id is not None and candidate.id == other.id:
        return False
    if candidate.activity_id != other.activity_id or candidate.date != other.date:
        return False
    c_start, c_end = _interval(candidate)
    o_start, o_end = _interval(other)
    return c_start < o_end and o_start < c_end


def overlaps(candidate: SlotLike, existing: Iterable[SlotLike]) -> bool:
    return any(conflicts_with(candidate, other) for other in existing)


def find_conflicts(db: Session, candidate: SlotLike) -> list[TimeSlots]:
    """Same-day, same-activity slots whose interval intersects the candidate."""
    same_day = (
        db.query(TimeSlots)
        .filter(
            TimeSlots.activity_id == candidate.activity_id,
            TimeSlots.date == candidate.date,
        )
        .all()
    )
    return [slot for slot in same_day if conflicts_with(candidate, slot)]
