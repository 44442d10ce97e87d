# backend/sportslot/services/schedule/versioning.py
"""
Data version counter for polling consumers.

The counter lives in app_settings.data_version. It is bumped with a single
UPDATE ... SET data_version = data_version + 1 inside the transaction of the
mutation it announces: a consumer that reads version V also reads every
change committed at or before V.
"""

from dataclasses import dataclass, field

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ...models import AppSettings, Bookings, TimeSlots
from .catalog import build_customer_catalog
from .config import ensure_defaults

CUSTOMER_VIEW = "customer"
OPERATOR_VIEW = "operator"


def bump_data_version(db: Session) -> int:
    """Increment the version in the caller's transaction and return the new value."""
    result = db.execute(
        update(AppSettings)
        .where(AppSettings.id == "main")
        .values(data_version=AppSettings.data_version + 1)
        .execution_options(synchronize_session="fetch")
    )
    if result.rowcount == 0:
        ensure_defaults(db)
        return bump_data_version(db)
    return get_data_version(db)


def get_data_version(db: Session) -> int:
    version = db.execute(
        select(AppSettings.data_version).where(AppSettings.id == "main")
    ).scalar()
    return version or 0


@dataclass
class SyncResult:
    version: int
    needs_sync: bool
    slots: list = field(default_factory=list)
    bookings: list = field(default_factory=list)
    settings: AppSettings | None = None


def poll(
    db: Session,
    last_seen_version: int,
    view: str = CUSTOMER_VIEW,
    full: bool = False,
) -> SyncResult:
    """
    Compare the consumer's last seen version with the current one.

    Data is attached only when the current version is strictly greater than
    last_seen_version (or full=True). Customers get the catalog projection and
    no bookings; operators get every slot and booking.
    """
    version = get_data_version(db)
    if not full and version <= last_seen_version:
        return SyncResult(version=version, needs_sync=False)

    app_settings = db.get(AppSettings, "main")
    if view == OPERATOR_VIEW:
        slots = (
            db.query(TimeSlots)
            .order_by(TimeSlots.date, TimeSlots.time, TimeSlots.activity_id)
            .all()
        )
        bookings = db.query(Bookings).order_by(Bookings.created_at.desc(), Bookings.id.desc()).all()
    else:
        slots = build_customer_catalog(db)
        bookings = []

    return SyncResult(
        version=version,
        needs_sync=True,
        slots=slots,
        bookings=bookings,
        settings=app_settings,
    )
