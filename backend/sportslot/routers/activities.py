# backend/sportslot/routers/activities.py
# PATCH = ALLOWED, DELETE = soft-delete via enabled=false (slots keep their activity)

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import errors
from ..database import atomic, get_db
from ..models import Activities as DBActivities
from ..schemas.activities import ActivityCreate, ActivityRead, ActivityUpdate
from ..services.schedule.versioning import bump_data_version

router = APIRouter(prefix="/activities", tags=["activities"])


@router.get("/", response_model=list[ActivityRead])
def list_activities(
    enabled_only: bool = False,
    db: Session = Depends(get_db),
):
    query = db.query(DBActivities)
    if enabled_only:
        query = query.filter(DBActivities.enabled == 1)
    return query.order_by(DBActivities.sort_order, DBActivities.id).all()


@router.get("/{id}", response_model=ActivityRead)
def get_activity(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBActivities, id)
    if not obj:
        raise errors.error_for_code(errors.ACTIVITY_NOT_FOUND)
    return obj


@router.post("/", response_model=ActivityRead, status_code=status.HTTP_201_CREATED)
def create_activity(
    data: ActivityCreate,
    db: Session = Depends(get_db),
):
    with atomic(db):
        obj = DBActivities(
            name=data.name,
            icon=data.icon,
            enabled=int(data.enabled),
            sort_order=data.sort_order,
        )
        db.add(obj)
        bump_data_version(db)
    db.refresh(obj)
    return obj


@router.patch("/{id}", response_model=ActivityRead)
def update_activity(
    id: int,
    data: ActivityUpdate,
    db: Session = Depends(get_db),
):
    with atomic(db):
        obj = db.get(DBActivities, id)
        if not obj:
            raise errors.error_for_code(errors.ACTIVITY_NOT_FOUND)

        changes = data.model_dump(exclude_unset=True)
        if "enabled" in changes:
            changes["enabled"] = int(changes["enabled"])
        changed = False
        for field, value in changes.items():
            if getattr(obj, field) != value:
                setattr(obj, field, value)
                changed = True

        # Enabling/disabling changes what customers see
        if changed:
            bump_data_version(db)

    db.refresh(obj)
    return obj
