from conftest import GOLF, MONDAY, TENNIS
from sportslot.services.schedule.overlap import SlotCandidate, conflicts_with, find_conflicts, overlaps


def _slot(time, duration=60, activity_id=GOLF, date=MONDAY, id=None):
    return SlotCandidate(activity_id, date, time, duration, id=id)


def test_intersecting_intervals_overlap():
    assert conflicts_with(_slot("10:00"), _slot("10:30"))
    assert conflicts_with(_slot("10:30"), _slot("10:00"))
    assert conflicts_with(_slot("10:00", 120), _slot("10:30", 30))


def test_touching_intervals_do_not_overlap():
    assert not conflicts_with(_slot("10:00"), _slot("11:00"))
    assert not conflicts_with(_slot("11:00"), _slot("10:00"))


def test_different_activity_or_date_never_overlaps():
    assert not conflicts_with(_slot("10:00"), _slot("10:00", activity_id=TENNIS))
    assert not conflicts_with(_slot("10:00"), _slot("10:00", date="2030-01-08"))


def test_slot_does_not_overlap_itself():
    assert not conflicts_with(_slot("10:00", id=7), _slot("10:30", id=7))


def test_overlaps_any():
    existing = [_slot("09:00"), _slot("12:00")]
    assert overlaps(_slot("11:30"), existing)
    assert not overlaps(_slot("10:00", 120), existing)


def test_find_conflicts_queries_same_activity_day(db, make_slot):
    golf_id = make_slot(time="10:00")
    make_slot(time="10:00", activity_id=TENNIS)

    conflicts = find_conflicts(db, _slot("10:30"))
    assert [s.id for s in conflicts] == [golf_id]
