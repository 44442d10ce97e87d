# backend/sportslot/routers/publication.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.publication import PendingChangesRead, PublicationResult
from ..services.schedule.publication import pending_changes, publish_all

router = APIRouter(prefix="/publication", tags=["publication"])


@router.post("/publish", response_model=PublicationResult)
def publish(db: Session = Depends(get_db)):
    report = publish_all(db)
    return PublicationResult(
        published=report.published,
        published_closures=report.published_closures,
        deleted=report.deleted,
        version=report.version,
    )


@router.get("/pending", response_model=PendingChangesRead)
def pending(db: Session = Depends(get_db)):
    changes = pending_changes(db)
    return PendingChangesRead(
        draft_slots=changes.draft_slots,
        outside_hours_slots=changes.outside_hours_slots,
        pending_deletions=changes.pending_deletions,
        draft_closures=changes.draft_closures,
        pending_closure_deletions=changes.pending_closure_deletions,
        has_changes=changes.has_changes,
    )
