# backend/sportslot/routers/slots.py
# Operator slot management. Every change is staged; customers see it after
# POST /publication/publish.

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from .. import errors
from ..database import get_db
from ..models import TimeSlots as DBTimeSlots
from ..schemas.slots import (
    GenerationResult,
    SlotCreate,
    SlotGenerate,
    SlotMove,
    SlotRead,
    SlotResize,
    SlotUpdate,
)
from ..services.schedule import lifecycle
from ..services.schedule.generator import GenerationRequest, generate_slots

router = APIRouter(prefix="/slots", tags=["slots"])


def _unwrap(result: lifecycle.LifecycleResult):
    if not result.ok:
        extra = {}
        if result.conflicts:
            extra["conflicts"] = [s.id for s in result.conflicts]
        raise errors.error_for_code(result.error_code, **extra)
    return result.slot


@router.get("/", response_model=list[SlotRead])
def list_slots(
    activity_id: Optional[int] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    state: Optional[str] = Query(default=None, pattern="^(draft|published|outside_hours)$"),
    db: Session = Depends(get_db),
):
    query = db.query(DBTimeSlots)
    if activity_id is not None:
        query = query.filter(DBTimeSlots.activity_id == activity_id)
    if date_from is not None:
        query = query.filter(DBTimeSlots.date >= date_from.isoformat())
    if date_to is not None:
        query = query.filter(DBTimeSlots.date <= date_to.isoformat())
    if state is not None:
        query = query.filter(DBTimeSlots.state == state)
    return query.order_by(DBTimeSlots.date, DBTimeSlots.time, DBTimeSlots.activity_id).all()


@router.get("/{id}", response_model=SlotRead)
def get_slot(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBTimeSlots, id)
    if not obj:
        raise errors.error_for_code(errors.SLOT_NOT_FOUND)
    return obj


@router.post("/", response_model=SlotRead, status_code=status.HTTP_201_CREATED)
def create_slot(
    data: SlotCreate,
    db: Session = Depends(get_db),
):
    result = lifecycle.create_slot(db, lifecycle.SlotDraft(
        activity_id=data.activity_id,
        date=data.date.isoformat(),
        time=data.time,
        duration_minutes=data.duration_minutes,
        max_capacity=data.max_capacity,
        price=data.price,
    ))
    return _unwrap(result)


@router.post("/generate", response_model=GenerationResult, status_code=status.HTTP_201_CREATED)
def generate(
    data: SlotGenerate,
    db: Session = Depends(get_db),
):
    report = generate_slots(db, GenerationRequest(
        start_date=data.start_date,
        end_date=data.end_date,
        activity_ids=data.activity_ids,
        duration_minutes=data.duration_minutes,
        max_capacity=data.max_capacity,
        price=data.price,
        lunch_break_start=data.lunch_break_start,
        lunch_break_end=data.lunch_break_end,
    ))
    return GenerationResult(
        created_count=report.created_count,
        warnings=report.warnings,
        slots=[SlotRead.model_validate(s) for s in report.created],
    )


@router.post("/{id}/move", response_model=SlotRead)
def move_slot(id: int, data: SlotMove, db: Session = Depends(get_db)):
    return _unwrap(lifecycle.move_slot(db, id, data.date.isoformat(), data.time))


@router.post("/{id}/resize", response_model=SlotRead)
def resize_slot(id: int, data: SlotResize, db: Session = Depends(get_db)):
    return _unwrap(lifecycle.resize_slot(db, id, data.duration_minutes))


@router.patch("/{id}", response_model=SlotRead)
def update_slot(id: int, data: SlotUpdate, db: Session = Depends(get_db)):
    return _unwrap(lifecycle.update_slot_details(
        db, id, max_capacity=data.max_capacity, price=data.price,
    ))


@router.post("/{id}/mark-deletion", response_model=SlotRead)
def mark_deletion(id: int, db: Session = Depends(get_db)):
    return _unwrap(lifecycle.mark_pending_deletion(db, id))


@router.post("/{id}/cancel-deletion", response_model=SlotRead)
def cancel_deletion(id: int, db: Session = Depends(get_db)):
    return _unwrap(lifecycle.cancel_pending_deletion(db, id))


@router.post("/{id}/confirm-deletion", status_code=status.HTTP_204_NO_CONTENT)
def confirm_deletion(id: int, db: Session = Depends(get_db)):
    _unwrap(lifecycle.confirm_deletion(db, id))


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_slot(id: int, db: Session = Depends(get_db)):
    _unwrap(lifecycle.delete_slot(db, id))

