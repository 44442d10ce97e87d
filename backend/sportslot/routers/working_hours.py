# backend/sportslot/routers/working_hours.py
# PUT replaces the given weekdays and reclassifies every slot against the new hours.

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.working_hours import WorkingHoursItem, WorkingHoursResult, WorkingHoursUpdate
from ..services.schedule.config import DayHours, load_schedule_configuration
from ..services.schedule.lifecycle import update_working_hours

router = APIRouter(prefix="/working_hours", tags=["working_hours"])


def _current_hours(db: Session) -> list[WorkingHoursItem]:
    config = load_schedule_configuration(db)
    return [
        WorkingHoursItem(
            day_of_week=wh.day_of_week,
            enabled=wh.enabled,
            start_time=wh.start_time,
            end_time=wh.end_time,
        )
        for wh in config.working_hours
    ]


@router.get("/", response_model=list[WorkingHoursItem])
def list_working_hours(db: Session = Depends(get_db)):
    return _current_hours(db)


@router.put("/", response_model=WorkingHoursResult)
def replace_working_hours(
    data: WorkingHoursUpdate,
    db: Session = Depends(get_db),
):
    reclassified = update_working_hours(db, [
        DayHours(h.day_of_week, h.enabled, h.start_time, h.end_time)
        for h in data.hours
    ])
    return WorkingHoursResult(hours=_current_hours(db), reclassified=reclassified)
