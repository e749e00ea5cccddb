"""Tests for slot occupancy helpers."""

from fillin_planner.engine.occupancy import (
    apply_statuses,
    effective_capacity,
    established_sub_group,
    lookup_students,
    resolve_current_occupants,
)
from fillin_planner.models import DailyStatus

DATE = "2025-03-03"


def status(student_id, value, schedule_id=100, status_date=DATE):
    return DailyStatus(
        student_id=student_id, schedule_id=schedule_id, status_date=status_date, status=value
    )


class TestResolveCurrentOccupants:
    """Tests for resolve_current_occupants function."""

    def test_no_statuses(self):
        assert resolve_current_occupants([1, 2], [], 100, DATE) == [1, 2]

    def test_absent_removed_fill_in_appended(self):
        statuses = [status(1, "marked_absent"), status(9, "assigned_fill_in")]
        assert resolve_current_occupants([1, 2], statuses, 100, DATE) == [2, 9]

    def test_other_slot_and_date_ignored(self):
        statuses = [
            status(1, "marked_absent", schedule_id=101),
            status(2, "marked_absent", status_date="2025-03-10"),
        ]
        assert resolve_current_occupants([1, 2], statuses, 100, DATE) == [1, 2]

    def test_duplicates_dropped(self):
        statuses = [status(2, "assigned_fill_in"), status(9, "assigned_fill_in"), status(9, "assigned_fill_in")]
        assert resolve_current_occupants([2], statuses, 100, DATE) == [2, 9]

    def test_unknown_status_ignored(self):
        assert resolve_current_occupants([1], [status(1, "present")], 100, DATE) == [1]


class TestApplyStatuses:
    """Tests for apply_statuses function."""

    def test_sets_current_occupants(self, make_slot):
        slot = make_slot(original_student_ids=[1, 2])
        updated = apply_statuses(slot, [status(1, "marked_absent")])
        assert updated.current_occupant_ids == [2]
        assert slot.current_occupant_ids is None

    def test_existing_occupants_kept(self, make_slot):
        slot = make_slot(original_student_ids=[1, 2], current_occupant_ids=[1])
        assert apply_statuses(slot, [status(1, "marked_absent")]) is slot

    def test_slot_without_date_unchanged(self, make_slot):
        slot = make_slot(original_student_ids=[1], slot_date=None)
        assert apply_statuses(slot, [status(1, "marked_absent")]) is slot


class TestEffectiveCapacity:
    """Tests for effective_capacity function."""

    def test_solo_original(self, make_student):
        originals = [make_student(1, group_of=1), make_student(2, group_of=3)]
        assert effective_capacity(4, originals) == 1

    def test_paired_original(self, make_student):
        assert effective_capacity(4, [make_student(1, group_of=2)]) == 2

    def test_solo_wins_over_paired(self, make_student):
        originals = [make_student(1, group_of=2), make_student(2, group_of=1)]
        assert effective_capacity(4, originals) == 1

    def test_group_uses_stored(self, make_student):
        assert effective_capacity(5, [make_student(1, group_of=3)]) == 5

    def test_no_originals_uses_stored(self):
        assert effective_capacity(4, []) == 4

    def test_invalid_stored_defaults_to_three(self):
        assert effective_capacity(0, []) == 3
        assert effective_capacity(None, []) == 3


class TestSubGroupAndLookup:
    """Tests for established_sub_group and lookup_students."""

    def test_first_non_null(self, make_student):
        occupants = [make_student(1), make_student(2, sub_group="Knights"), make_student(3, sub_group="Rooks")]
        assert established_sub_group(occupants) == "Knights"

    def test_none_established(self, make_student):
        assert established_sub_group([make_student(1)]) is None
        assert established_sub_group([]) is None

    def test_lookup_drops_unknown_ids(self, make_student):
        by_id = {1: make_student(1), 2: make_student(2)}
        assert [s.id for s in lookup_students([2, 9, 1], by_id)] == [2, 1]
