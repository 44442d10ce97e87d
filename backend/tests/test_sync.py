from conftest import reload_slot
from sportslot.services.schedule import lifecycle
from sportslot.services.schedule.catalog import CatalogSlot
from sportslot.services.schedule.reservation import CustomerDetails, reserve
from sportslot.services.schedule.versioning import (
    CUSTOMER_VIEW,
    OPERATOR_VIEW,
    bump_data_version,
    get_data_version,
    poll,
)
from sportslot.models import AppSettings, TimeSlots


def test_no_data_when_up_to_date(db):
    version = get_data_version(db)

    result = poll(db, version)

    assert not result.needs_sync
    assert result.version == version
    assert result.slots == [] and result.bookings == []


def test_data_after_change(db, make_slot):
    version = get_data_version(db)
    make_slot()

    result = poll(db, version)

    assert result.needs_sync
    assert result.version > version
    assert len(result.slots) == 1
    assert isinstance(result.slots[0], CatalogSlot)
    assert result.bookings == []
    assert result.settings.default_max_capacity == 4


def test_full_forces_data(db):
    result = poll(db, get_data_version(db), full=True)
    assert result.needs_sync
    assert result.settings is not None


def test_operator_view_includes_staged_slots_and_bookings(db, make_slot):
    published_id = make_slot(time="10:00")
    make_slot(time="12:00", publish=False)
    reserve(db, published_id, 1, CustomerDetails("Bob", "bob@example.com"))

    customer = poll(db, 0, view=CUSTOMER_VIEW)
    operator = poll(db, 0, view=OPERATOR_VIEW)

    assert [s.id for s in customer.slots] == [published_id]
    assert customer.bookings == []
    assert len(operator.slots) == 2
    assert all(isinstance(s, TimeSlots) for s in operator.slots)
    assert [b.customer_name for b in operator.bookings] == ["Bob"]


def test_bump_is_monotonic_and_transactional(db):
    start = get_data_version(db)
    assert bump_data_version(db) == start + 1
    db.rollback()
    assert get_data_version(db) == start

    bump_data_version(db)
    db.commit()
    assert get_data_version(db) == start + 1


def test_bump_recreates_missing_settings(db):
    db.query(AppSettings).delete()
    db.commit()

    assert bump_data_version(db) == 2
    db.commit()
    assert db.get(AppSettings, "main").data_version == 2


def test_customer_view_uses_published_position(db, make_slot):
    slot_id = make_slot(time="10:00")
    lifecycle.resize_slot(db, slot_id, 30)

    result = poll(db, 0)

    assert result.slots[0].duration_minutes == 60
    assert reload_slot(db, slot_id).duration_minutes == 30
