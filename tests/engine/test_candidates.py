"""Tests for candidate filtering."""

import pytest

from fillin_planner.engine.candidates import FilterStats, filter_candidates, require_slot_date
from fillin_planner.exceptions import MissingSlotDateError
from fillin_planner.models import BlockType, DailyBlock


class TestFilterCandidates:
    """Tests for filter_candidates function."""

    def test_eligible_keep_input_order(self, make_student, make_slot):
        students = [make_student(3), make_student(1, lessons_owed=5), make_student(2)]
        eligible = filter_candidates(students, make_slot(), [], [])
        assert [s.id for s in eligible] == [3, 1, 2]

    def test_exclusion_reasons(self, make_student, make_slot):
        students = [
            make_student(1, lessons_owed=0),
            make_student(2, is_active=False),
            make_student(3),
            make_student(4, availability_string="Tuesday: 15:30"),
            make_student(5, class_name="Year 7B"),
            make_student(6),
        ]
        blocks = [DailyBlock("2025-03-03", BlockType.YEAR_LEVEL_ABSENCE, "Year 7")]
        slot = make_slot(original_student_ids=[3])
        stats = FilterStats()

        eligible = filter_candidates(students, slot, blocks, [students[2]], stats=stats)

        assert [s.id for s in eligible] == [6]
        assert stats.to_dict() == {
            "not_owed": 1,
            "inactive": 1,
            "occupant": 1,
            "unavailable": 1,
            "sub_group": 0,
            "blocked": 1,
            "eligible": 1,
        }
        assert stats.total_skipped == 5

    def test_current_fill_ins_excluded(self, make_student, make_slot):
        students = [make_student(1), make_student(9), make_student(2)]
        slot = make_slot(original_student_ids=[1], current_occupant_ids=[9])
        eligible = filter_candidates(students, slot, [], [students[1]])
        assert [s.id for s in eligible] == [2]

    def test_sub_group_gate(self, make_student, make_slot):
        occupants = [make_student(1, sub_group="Knights")]
        slot = make_slot(original_student_ids=[1])
        students = [
            make_student(2, sub_group="Rooks"),
            make_student(3, sub_group="Knights"),
            make_student(4),
        ]
        stats = FilterStats()
        eligible = filter_candidates(students, slot, [], occupants, stats=stats)
        assert [s.id for s in eligible] == [3, 4]
        assert stats.sub_group == 1

    def test_no_sub_group_gate_without_occupants(self, make_student, make_slot):
        students = [make_student(2, sub_group="Rooks"), make_student(3, sub_group="Knights")]
        assert len(filter_candidates(students, make_slot(), [], [])) == 2

    def test_occupant_details_required(self, make_student, make_slot):
        """Without occupant details the sub-group gate cannot be applied."""
        slot = make_slot(original_student_ids=[1])
        with pytest.raises(ValueError, match="do not match current occupants"):
            filter_candidates([make_student(2, sub_group="Rooks")], slot, [], [])

    def test_occupant_details_for_other_student(self, make_student, make_slot):
        slot = make_slot(original_student_ids=[1])
        with pytest.raises(ValueError):
            filter_candidates([make_student(2)], slot, [], [make_student(5)])

    def test_public_holiday_empties_pool(self, make_student, make_slot, holiday):
        students = [make_student(1), make_student(2)]
        assert filter_candidates(students, make_slot(), [holiday], []) == []

    def test_block_on_other_date_ignored(self, make_student, make_slot):
        blocks = [DailyBlock("2025-03-10", BlockType.PUBLIC_HOLIDAY)]
        assert len(filter_candidates([make_student(1)], make_slot(), blocks, [])) == 1

    def test_availability_soundness(self, make_student, make_slot):
        students = [
            make_student(1, availability_string="Monday: 15:00"),
            make_student(2, availability_string=None),
            make_student(3, availability_string="Monday: 15:30"),
        ]
        eligible = filter_candidates(students, make_slot(), [], [])
        assert [s.id for s in eligible] == [3]

    def test_missing_slot_date(self, make_student, make_slot):
        with pytest.raises(MissingSlotDateError) as exc_info:
            filter_candidates([make_student(1)], make_slot(schedule_id=42, slot_date=None), [], [])
        assert exc_info.value.schedule_id == 42

    def test_idempotent(self, make_student, make_slot):
        students = [make_student(i, lessons_owed=i % 2, class_name=f"Year {i}A") for i in range(8)]
        blocks = [DailyBlock("2025-03-03", BlockType.YEAR_LEVEL_ABSENCE, "Year 3")]
        slot = make_slot(original_student_ids=[5])
        first = filter_candidates(students, slot, blocks, [students[5]])
        second = filter_candidates(students, slot, blocks, [students[5]])
        assert [s.id for s in first] == [s.id for s in second] == [1, 7]


class TestRequireSlotDate:
    """Tests for require_slot_date function."""

    def test_returns_date(self, make_slot):
        assert require_slot_date(make_slot()) == "2025-03-03"

    def test_empty_date(self, make_slot):
        with pytest.raises(MissingSlotDateError):
            require_slot_date(make_slot(slot_date=""))
