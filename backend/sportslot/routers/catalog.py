# backend/sportslot/routers/catalog.py
# Customer listing: published slots at their published position.

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.slots import CatalogSlotRead
from ..services.schedule.catalog import build_customer_catalog

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/", response_model=list[CatalogSlotRead])
def list_catalog(
    activity_id: Optional[int] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    db: Session = Depends(get_db),
):
    return build_customer_catalog(db, activity_id=activity_id, date_from=date_from, date_to=date_to)
