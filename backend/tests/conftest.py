import os
import tempfile
from pathlib import Path

# Point the app at a throwaway database before sportslot reads its settings
_TEST_DIR = Path(tempfile.mkdtemp(prefix="sportslot-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DIR / 'test.db'}"
os.environ["REDIS_URL"] = ""
os.environ["TRANSACTION_MAX_WAIT_SECONDS"] = "5"

import pytest
from fastapi.testclient import TestClient

from sportslot.database import SessionLocal, engine
from sportslot.init_db import seed_defaults
from sportslot.main import app
from sportslot.models import Base, TimeSlots
from sportslot.services.schedule import lifecycle
from sportslot.services.schedule.config import DayHours

# 2030-01-07 is a Monday; 2030-01-06 a Sunday (closed by default)
MONDAY = "2030-01-07"
TUESDAY = "2030-01-08"
SUNDAY = "2030-01-06"

GOLF, TENNIS, PADEL = 1, 2, 3


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        seed_defaults(session)
    finally:
        session.close()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_slot(db):
    """Create a slot through the lifecycle; publish it unless told otherwise."""

    def _make(
        date=MONDAY,
        time="10:00",
        activity_id=GOLF,
        duration_minutes=60,
        max_capacity=4,
        price=50.0,
        current_bookings=0,
        publish=True,
    ) -> int:
        result = lifecycle.create_slot(db, lifecycle.SlotDraft(
            activity_id=activity_id,
            date=date,
            time=time,
            duration_minutes=duration_minutes,
            max_capacity=max_capacity,
            price=price,
        ))
        assert result.ok, result.error_code
        slot = result.slot
        slot_id = slot.id
        if publish:
            assert lifecycle.publish_slot(slot) is None
        slot.current_bookings = current_bookings
        db.commit()
        return slot_id

    return _make


@pytest.fixture
def set_hours(db):
    """Replace working hours for the given weekdays (0 = Sunday)."""

    def _set(*hours: tuple[int, bool, str, str]) -> int:
        return lifecycle.update_working_hours(db, [DayHours(*h) for h in hours])

    return _set


def reload_slot(db, slot_id: int) -> TimeSlots | None:
    # End the current read transaction so other sessions' commits are visible
    db.rollback()
    return db.get(TimeSlots, slot_id)
