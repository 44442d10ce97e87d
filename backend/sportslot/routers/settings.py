# backend/sportslot/routers/settings.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import atomic, get_db
from ..schemas.settings import SettingsRead, SettingsUpdate
from ..services.schedule.config import get_app_settings
from ..services.schedule.versioning import bump_data_version

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/", response_model=SettingsRead)
def read_settings(db: Session = Depends(get_db)):
    return get_app_settings(db)


@router.patch("/", response_model=SettingsRead)
def update_settings(
    data: SettingsUpdate,
    db: Session = Depends(get_db),
):
    with atomic(db):
        obj = get_app_settings(db)
        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(obj, field, value)
        bump_data_version(db)

    db.refresh(obj)
    return obj
