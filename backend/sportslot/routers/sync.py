# backend/sportslot/routers/sync.py
# Polling endpoint: clients send the last version they saw and get data only
# when something changed since.

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.bookings import BookingRead
from ..schemas.settings import SettingsRead
from ..schemas.slots import CatalogSlotRead, SlotRead
from ..schemas.sync import SyncData, SyncResponse
from ..services.schedule.versioning import CUSTOMER_VIEW, OPERATOR_VIEW, poll

router = APIRouter(prefix="/sync", tags=["sync"])


@router.get("/", response_model=SyncResponse)
def sync(
    version: int = Query(default=0, ge=0),
    view: str = Query(default=CUSTOMER_VIEW, pattern=f"^({CUSTOMER_VIEW}|{OPERATOR_VIEW})$"),
    full: bool = False,
    db: Session = Depends(get_db),
):
    result = poll(db, version, view=view, full=full)
    if not result.needs_sync:
        return SyncResponse(needs_sync=False, version=result.version)

    slot_schema = SlotRead if view == OPERATOR_VIEW else CatalogSlotRead
    return SyncResponse(
        needs_sync=True,
        version=result.version,
        data=SyncData(
            slots=[slot_schema.model_validate(s) for s in result.slots],
            bookings=[BookingRead.model_validate(b) for b in result.bookings],
            settings=SettingsRead.model_validate(result.settings) if result.settings else None,
        ),
    )
