from datetime import date

from conftest import MONDAY, TUESDAY, reload_slot
from sportslot.models import ClosedPeriods, ClosureState, SlotState, TimeSlots
from sportslot.services.schedule import lifecycle
from sportslot.services.schedule.catalog import build_customer_catalog
from sportslot.services.schedule.publication import pending_changes, publish_all
from sportslot.services.schedule.versioning import get_data_version


def test_pending_deletion_is_deleted_not_published(db, make_slot):
    slot_id = make_slot(publish=False)
    lifecycle.mark_pending_deletion(db, slot_id)

    report = publish_all(db)

    assert report.deleted == 1
    assert report.published == 0
    assert reload_slot(db, slot_id) is None


def test_publish_all_applies_staged_changes(db, make_slot):
    draft_id = make_slot(time="10:00", publish=False)
    moved_id = make_slot(time="12:00")
    outside_id = make_slot(time="17:30", publish=False)
    lifecycle.move_slot(db, moved_id, TUESDAY, "09:00")
    lifecycle.create_closure(db, date(2030, 1, 10), date(2030, 1, 11))

    report = publish_all(db)

    assert (report.published, report.published_closures, report.deleted) == (2, 1, 0)
    assert reload_slot(db, draft_id).state == SlotState.PUBLISHED
    moved = reload_slot(db, moved_id)
    assert moved.state == SlotState.PUBLISHED
    assert moved.snapshot is None
    assert (moved.date, moved.time) == (TUESDAY, "09:00")
    assert reload_slot(db, outside_id).state == SlotState.OUTSIDE_HOURS
    assert db.query(ClosedPeriods).one().state == ClosureState.PUBLISHED


def test_publish_all_is_idempotent(db, make_slot):
    make_slot(publish=False)
    lifecycle.create_closure(db, date(2030, 1, 10), date(2030, 1, 10))

    first = publish_all(db)
    version_after_first = get_data_version(db)
    second = publish_all(db)

    assert first.changed
    assert (second.published, second.published_closures, second.deleted) == (0, 0, 0)
    assert second.version is None
    assert get_data_version(db) == version_after_first


def test_staged_changes_invisible_until_published(db, make_slot):
    published_id = make_slot(time="10:00")
    draft_id = make_slot(time="12:00", publish=False)
    lifecycle.move_slot(db, published_id, MONDAY, "15:00")

    catalog = {s.id: s for s in build_customer_catalog(db)}
    assert set(catalog) == {published_id}
    assert catalog[published_id].time == "10:00"

    publish_all(db)

    catalog = {s.id: s for s in build_customer_catalog(db)}
    assert set(catalog) == {published_id, draft_id}
    assert catalog[published_id].time == "15:00"


def test_pending_changes_summary(db, make_slot):
    assert not pending_changes(db).has_changes

    make_slot(time="10:00", publish=False)
    make_slot(time="17:30", publish=False)
    doomed = make_slot(time="12:00")
    lifecycle.mark_pending_deletion(db, doomed)
    lifecycle.create_closure(db, date(2030, 1, 10), date(2030, 1, 10))

    changes = pending_changes(db)
    assert changes.draft_slots == 1
    assert changes.outside_hours_slots == 1
    assert changes.pending_deletions == 1
    assert changes.draft_closures == 1
    assert changes.pending_closure_deletions == 0
    assert changes.has_changes

    publish_all(db)
    changes = pending_changes(db)
    assert not changes.has_changes
    assert changes.outside_hours_slots == 1
    assert db.query(TimeSlots).count() == 2


def test_outside_hours_only_is_not_a_change(db, make_slot):
    make_slot(time="17:30", publish=False)
    assert not pending_changes(db).has_changes
    assert not publish_all(db).changed
