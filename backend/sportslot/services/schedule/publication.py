# backend/sportslot/services/schedule/publication.py
"""
Publish all staged operator changes in one transaction.
"""

import logging
from dataclasses import asdict, dataclass

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...database import atomic
from ...models import ClosedPeriods, ClosureState, SlotState, TimeSlots
from ..events import emit_event
from .lifecycle import publish_closure, publish_slot
from .versioning import bump_data_version

logger = logging.getLogger(__name__)


@dataclass
class PublicationReport:
    published: int = 0
    published_closures: int = 0
    deleted: int = 0
    version: int | None = None

    @property
    def changed(self) -> bool:
        return bool(self.published or self.published_closures or self.deleted)


@dataclass
class PendingChanges:
    draft_slots: int
    outside_hours_slots: int
    pending_deletions: int
    draft_closures: int
    pending_closure_deletions: int

    @property
    def has_changes(self) -> bool:
        return bool(
            self.draft_slots
            or self.pending_deletions
            or self.draft_closures
            or self.pending_closure_deletions
        )


def publish_all(db: Session) -> PublicationReport:
    """
    Apply staged changes:
    - slots and closures marked for deletion are removed
    - draft slots are published (snapshot cleared)
    - draft closures are published
    OutsideHours slots are left as they are. A second call finds nothing to do
    and leaves the data version untouched.
    """
    report = PublicationReport()

    with atomic(db):
        for slot in db.query(TimeSlots).filter(TimeSlots.pending_deletion == 1).all():
            db.delete(slot)
            report.deleted += 1
        for closure in db.query(ClosedPeriods).filter(ClosedPeriods.pending_deletion == 1).all():
            db.delete(closure)
            report.deleted += 1
        db.flush()

        for slot in db.query(TimeSlots).filter(TimeSlots.state == SlotState.DRAFT).all():
            if publish_slot(slot) is None:
                report.published += 1

        for closure in db.query(ClosedPeriods).filter(ClosedPeriods.state == ClosureState.DRAFT).all():
            if publish_closure(closure) is None:
                report.published_closures += 1

        if report.changed:
            report.version = bump_data_version(db)

    if report.changed:
        logger.info(
            f"Schedule published: {report.published} slots, "
            f"{report.published_closures} closures, {report.deleted} deleted"
        )
        emit_event("schedule_published", asdict(report))
    return report


def pending_changes(db: Session) -> PendingChanges:
    def _count(model, *criteria) -> int:
        return db.query(func.count(model.id)).filter(*criteria).scalar() or 0

    return PendingChanges(
        draft_slots=_count(TimeSlots, TimeSlots.state == SlotState.DRAFT, TimeSlots.pending_deletion == 0),
        outside_hours_slots=_count(TimeSlots, TimeSlots.state == SlotState.OUTSIDE_HOURS),
        pending_deletions=_count(TimeSlots, TimeSlots.pending_deletion == 1),
        draft_closures=_count(
            ClosedPeriods, ClosedPeriods.state == ClosureState.DRAFT, ClosedPeriods.pending_deletion == 0
        ),
        pending_closure_deletions=_count(ClosedPeriods, ClosedPeriods.pending_deletion == 1),
    )
