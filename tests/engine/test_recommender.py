"""Tests for the greedy recommender."""

import pytest

from fillin_planner.engine.recommender import needed_count, rank_candidates, recommend


def ids(group):
    return [member.student_id for member in group]


class TestRankCandidates:
    """Tests for rank_candidates function."""

    def test_highest_owed_first_stable(self, make_student):
        students = [
            make_student("A", lessons_owed=5),
            make_student("C", lessons_owed=3),
            make_student("B", lessons_owed=5),
            make_student("D", lessons_owed=1),
        ]
        assert [s.id for s in rank_candidates(students)] == ["A", "B", "C", "D"]


class TestNeededCount:
    """Tests for needed_count function."""

    def test_uses_current_occupants(self, make_slot):
        slot = make_slot(original_student_ids=[1, 2], current_occupant_ids=[2])
        assert needed_count(slot, 3) == 2

    def test_stored_capacity_ignored(self, make_slot):
        assert needed_count(make_slot(capacity=4, original_student_ids=[1]), 1) == 0

    def test_full(self, make_slot):
        assert needed_count(make_slot(original_student_ids=[1, 2, 3]), 3) == 0


class TestRecommend:
    """Tests for recommend function."""

    def test_top_owed_fill_needed_places(self, make_student, make_slot):
        candidates = [
            make_student("A", lessons_owed=5),
            make_student("B", lessons_owed=5),
            make_student("C", lessons_owed=3),
            make_student("D", lessons_owed=1),
        ]
        group = recommend(make_slot(capacity=2), candidates, [], 2)
        assert ids(group) == ["A", "B"]

    def test_snapshot_fields(self, make_student, make_slot):
        candidate = make_student(1, name="Ava", lessons_owed=4, sub_group="Knights")
        (member,) = recommend(make_slot(capacity=1), [candidate], [], 1)
        assert member.to_dict() == {
            "student_id": 1,
            "name": "Ava",
            "lessons_owed": 4,
            "group_of": 3,
            "sub_group": "Knights",
        }

    def test_full_slot_recommends_nobody(self, make_student, make_slot):
        slot = make_slot(original_student_ids=[1, 2, 3])
        occupants = [make_student(1), make_student(2), make_student(3)]
        assert recommend(slot, [make_student(4)], occupants, 3) == []

    def test_solo_lock(self, make_student, make_slot):
        """A solo candidate takes the only place when capacity is 1."""
        candidates = [make_student(1, group_of=1, lessons_owed=2), make_student(2, group_of=1)]
        assert ids(recommend(make_slot(capacity=1), candidates, [], 1)) == [1]

    def test_solo_candidate_locks_group_slot(self, make_student, make_slot):
        candidates = [make_student(1, group_of=1, lessons_owed=9), make_student(2), make_student(3)]
        group = recommend(make_slot(capacity=3), candidates, [], 3)
        assert ids(group) == [1]

    def test_solo_candidate_blocked_by_occupant(self, make_student, make_slot):
        slot = make_slot(original_student_ids=[1])
        occupants = [make_student(1)]
        candidates = [make_student(2, group_of=1, lessons_owed=9), make_student(3)]
        assert ids(recommend(slot, candidates, occupants, 3)) == [3]

    def test_first_accepted_sets_sub_group(self, make_student, make_slot):
        candidates = [
            make_student(1, sub_group="Knights", lessons_owed=5),
            make_student(2, sub_group="Rooks", lessons_owed=4),
            make_student(3, lessons_owed=3),
            make_student(4, sub_group="Knights", lessons_owed=2),
        ]
        group = recommend(make_slot(capacity=3), candidates, [], 3)
        assert ids(group) == [1, 3, 4]
        assert {m.sub_group for m in group} - {None} == {"Knights"}

    def test_untagged_first_does_not_set_sub_group(self, make_student, make_slot):
        candidates = [
            make_student(1, lessons_owed=5),
            make_student(2, sub_group="Rooks", lessons_owed=4),
            make_student(3, sub_group="Knights", lessons_owed=3),
        ]
        group = recommend(make_slot(capacity=3), candidates, [], 3)
        assert ids(group) == [1, 2]

    def test_occupant_sub_group_is_compulsory(self, make_student, make_slot):
        slot = make_slot(original_student_ids=[1])
        occupants = [make_student(1, sub_group="Knights")]
        candidates = [make_student(2, sub_group="Rooks", lessons_owed=9), make_student(3, sub_group="Knights")]
        assert ids(recommend(slot, candidates, occupants, 3)) == [3]

    def test_paired_slot(self, make_student, make_slot):
        slot = make_slot(capacity=2, original_student_ids=[1])
        occupants = [make_student(1, group_of=2)]
        candidates = [make_student(2, group_of=3, lessons_owed=9), make_student(3, group_of=2)]
        assert ids(recommend(slot, candidates, occupants, 2)) == [3]

    def test_never_exceeds_capacity(self, make_student, make_slot):
        candidates = [make_student(i) for i in range(10)]
        slot = make_slot(capacity=4, original_student_ids=[100], current_occupant_ids=[])
        assert len(recommend(slot, candidates, [], 4)) == 4

    def test_idempotent(self, make_student, make_slot):
        candidates = [make_student(i, lessons_owed=i % 3 + 1) for i in range(6)]
        slot = make_slot()
        first = recommend(slot, candidates, [], 3)
        second = recommend(slot, candidates, [], 3)
        assert first == second

    def test_empty_pool(self, make_slot):
        assert recommend(make_slot(), [], [], 3) == []

    def test_full_pair_slot(self, make_student, make_slot):
        slot = make_slot(capacity=2, original_student_ids=[1, 2])
        occupants = [make_student(1), make_student(2)]
        assert recommend(slot, [make_student(3), make_student(4)], occupants, 2) == []

    def test_occupant_details_required(self, make_student, make_slot):
        """A slot with occupants cannot be filled without their details."""
        slot = make_slot(capacity=3, original_student_ids=[1])
        with pytest.raises(ValueError, match="do not match current occupants"):
            recommend(slot, [make_student(2, group_of=1)], [], 3)

    def test_partial_occupant_details(self, make_student, make_slot):
        slot = make_slot(capacity=3, original_student_ids=[1, 2])
        with pytest.raises(ValueError):
            recommend(slot, [make_student(3), make_student(4)], [make_student(1)], 3)

    def test_solo_original_in_occupied_slot(self, make_student, make_slot):
        """Effective capacity and occupant details keep a solo slot closed."""
        slot = make_slot(capacity=3, original_student_ids=[1])
        occupants = [make_student(1, group_of=1)]
        candidates = [make_student(2, group_of=1), make_student(3), make_student(4)]
        assert recommend(slot, candidates, occupants, 1) == []


class TestGroupInvariants:
    """Capacity, solo exclusivity and sub-group cohesion over mixed pools."""

    @pytest.fixture
    def pool(self, make_student):
        return [
            make_student(1, group_of=1, lessons_owed=2),
            make_student(2, group_of=2, lessons_owed=6),
            make_student(3, sub_group="Knights", lessons_owed=5),
            make_student(4, sub_group="Rooks", lessons_owed=5),
            make_student(5, lessons_owed=4),
            make_student(6, group_of=2, lessons_owed=1),
            make_student(7, sub_group="Knights", lessons_owed=1),
        ]

    @pytest.mark.parametrize("capacity", [1, 2, 3, 4])
    @pytest.mark.parametrize("occupant_ids", [[], [3], [5], [1]])
    def test_invariants(self, make_slot, pool, capacity, occupant_ids):
        by_id = {s.id: s for s in pool}
        occupants = [by_id[i] for i in occupant_ids]
        candidates = [s for s in pool if s.id not in occupant_ids]
        slot = make_slot(capacity=capacity, original_student_ids=list(occupant_ids))

        group = recommend(slot, candidates, occupants, capacity)
        members = [*occupants, *(by_id[m.student_id] for m in group)]

        assert len(members) <= max(capacity, len(occupants))
        if any(s.group_of == 1 for s in members) and group:
            assert len(members) == 1
        if any(s.group_of == 2 for s in members):
            assert len(members) <= 2
        sub_groups = {s.sub_group for s in members if s.sub_group}
        assert len(sub_groups) <= 1
