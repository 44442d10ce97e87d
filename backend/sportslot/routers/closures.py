# backend/sportslot/routers/closures.py
# PATCH = 405. DELETE = drafts only; published closures go through
# mark-deletion + publish (or confirm-deletion).

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .. import errors
from ..database import get_db
from ..models import ClosedPeriods as DBClosedPeriods
from ..schemas.closures import ClosureCreate, ClosureRead
from ..services.schedule import lifecycle

router = APIRouter(prefix="/closures", tags=["closures"])


def _unwrap(result: lifecycle.LifecycleResult):
    if not result.ok:
        raise errors.error_for_code(result.error_code)
    return result.closure


@router.get("/", response_model=list[ClosureRead])
def list_closures(db: Session = Depends(get_db)):
    return db.query(DBClosedPeriods).order_by(DBClosedPeriods.start_date).all()


@router.get("/{id}", response_model=ClosureRead)
def get_closure(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBClosedPeriods, id)
    if not obj:
        raise errors.error_for_code(errors.CLOSURE_NOT_FOUND)
    return obj


@router.post("/", response_model=ClosureRead, status_code=status.HTTP_201_CREATED)
def create_closure(
    data: ClosureCreate,
    db: Session = Depends(get_db),
):
    return _unwrap(lifecycle.create_closure(db, data.start_date, data.end_date, data.reason))


@router.post("/{id}/mark-deletion", response_model=ClosureRead)
def mark_deletion(id: int, db: Session = Depends(get_db)):
    return _unwrap(lifecycle.mark_closure_pending_deletion(db, id))


@router.post("/{id}/cancel-deletion", response_model=ClosureRead)
def cancel_deletion(id: int, db: Session = Depends(get_db)):
    return _unwrap(lifecycle.cancel_closure_pending_deletion(db, id))


@router.post("/{id}/confirm-deletion", status_code=status.HTTP_204_NO_CONTENT)
def confirm_deletion(id: int, db: Session = Depends(get_db)):
    _unwrap(lifecycle.confirm_closure_deletion(db, id))


@router.patch("/{id}")
def patch_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_closure(id: int, db: Session = Depends(get_db)):
    _unwrap(lifecycle.delete_closure(db, id))
