"""Test fixtures for fill-in planner tests."""

import json

import pytest

from fillin_planner.models import BlockType, DailyBlock, Slot, Student

MONDAY_AFTERNOON = "Monday: 15:00-17:00"


@pytest.fixture
def make_student():
    """Factory for students that are, by default, eligible on Monday afternoons."""

    def _make(student_id, **kwargs) -> Student:
        defaults = {
            "name": f"Student {student_id}",
            "group_of": 3,
            "sub_group": None,
            "lessons_owed": 1,
            "availability_string": MONDAY_AFTERNOON,
            "class_name": "Year 5A",
            "is_active": True,
        }
        defaults.update(kwargs)
        return Student(id=student_id, **defaults)

    return _make


@pytest.fixture
def make_slot():
    """Factory for a Monday 15:30 slot on 2025-03-03."""

    def _make(schedule_id=100, **kwargs) -> Slot:
        defaults = {
            "day_of_week": "Monday",
            "start_time": "15:30",
            "capacity": 3,
            "coach_id": 7,
            "coach_name": "Coach Kim",
            "original_student_ids": [],
            "current_occupant_ids": None,
            "slot_date": "2025-03-03",
        }
        defaults.update(kwargs)
        return Slot(schedule_id=schedule_id, **defaults)

    return _make


@pytest.fixture
def holiday():
    """Public holiday on the default slot date."""
    return DailyBlock(block_date="2025-03-03", block_type=BlockType.PUBLIC_HOLIDAY)


@pytest.fixture
def data_dir(tmp_path):
    """Data directory with a small roster, slots, blocks and statuses."""
    students = [
        {"id": 1, "Name": "Ava", "groupOf": 1, "lessons owed": 0,
         "availability_string": "Monday: 15:30", "class_name": "Year 5A", "is_active": True},
        {"id": 2, "Name": "Ben", "groupOf": 1, "lessons owed": 4,
         "availability_string": "Monday: 15:00-16:00", "class_name": "Year 6B", "is_active": True},
        {"id": 3, "Name": "Cai", "groupOf": 1, "lessons owed": 2,
         "availability_string": "Monday: 15:30", "class_name": "Year 7A", "is_active": True},
        {"id": 4, "Name": "Dee", "groupOf": 3, "sub_group": "Knights", "lessons owed": 5,
         "availability_string": "Tuesday: 4pm", "class_name": "Year 8A", "is_active": True},
        {"id": 5, "Name": "Eli", "groupOf": 3, "sub_group": "Knights", "lessons owed": 1,
         "availability_string": "Tuesday: 16:00", "class_name": "Year 8A", "is_active": False},
        {"id": 6, "Name": "Fay", "groupOf": 3, "lessons owed": 3,
         "availability_string": "Tuesday: 15:00-16:30", "class_name": "Year 8B", "is_active": True},
        {"Name": "No Id", "groupOf": 1},
    ]
    slots = [
        {"schedule_id": 10, "day_of_week": "Monday", "start_time": "15:30:00", "capacity": 3,
         "coach_id": 7, "coach_name": "Coach Kim", "original_student_ids": [1],
         "slot_date": "2025-03-03"},
        {"schedule_id": 11, "day_of_week": "Tuesday", "start_time": "16:00:00", "capacity": 3,
         "coach_id": 8, "coach_name": "Coach Lee", "original_student_ids": [4, 5],
         "slot_date": "2025-03-04"},
    ]
    blocks = [
        {"block_date": "2025-03-03", "block_type": "Year Level Absence", "identifier": "Year 7"},
        {"block_date": "2025-03-10", "block_type": "Public Holiday", "identifier": None},
    ]
    statuses = [
        {"student_id": 1, "lesson_schedule_id": 10, "status_date": "2025-03-03",
         "status": "marked_absent"},
        {"student_id": 4, "lesson_schedule_id": 11, "status_date": "2025-03-04",
         "status": "marked_absent"},
    ]
    (tmp_path / "students.json").write_text(json.dumps(students), encoding="utf-8")
    (tmp_path / "slots.json").write_text(json.dumps(slots), encoding="utf-8")
    (tmp_path / "blocks.json").write_text(json.dumps(blocks), encoding="utf-8")
    (tmp_path / "daily-statuses.json").write_text(json.dumps(statuses), encoding="utf-8")
    return tmp_path
